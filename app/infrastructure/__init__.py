"""Infrastructure modules for the extensible bot framework.

- configuration: Settings management (settings, Settings)
- logging: Structured logging (get_module_logger, bind_request_context)
- i18n: Translation catalogs, locale resolution and interpolation
- parsing: Chat command tokenizer (StringParser)
- commands: Arguments, converters, command registry and dispatcher
- checks: Predicates gating command execution
- registry: Key-value registry storage
- extensions: Extension lifecycle and the in-process event bus
"""
