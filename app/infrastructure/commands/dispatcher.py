"""Command dispatch for chat messages and slash interactions.

Dispatch flow (both paths):
1. Resolve the command (and subcommand) by name
2. Bind logging context for the invocation
3. Run checks
4. Parse arguments
5. Call the handler
6. Relay user-facing errors; log and mask unexpected ones
"""

import inspect
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional

from infrastructure.checks.context import run_checks
from infrastructure.commands.arguments import ParsedArguments
from infrastructure.commands.context import CommandContext
from infrastructure.commands.errors import RelayedError
from infrastructure.commands.models import Command, CommandType
from infrastructure.commands.options import OptionType, options_from_payload
from infrastructure.commands.registry import CommandRegistry
from infrastructure.configuration import CommandsSettings, settings
from infrastructure.i18n import (
    Locale,
    LocaleResolutionContext,
    LocaleResolver,
    TranslationKey,
    Translator,
)
from infrastructure.logging import bind_request_context, get_module_logger
from infrastructure.parsing import StringParser

logger = get_module_logger()

HELP_COMMANDS = ("help", "aide")

# Locale codes used by the platform for description localizations
PLATFORM_LOCALES = {
    Locale.EN_US: "en-US",
    Locale.FR_FR: "fr",
}

_GROUP_TYPES = (OptionType.SUB_COMMAND, OptionType.SUB_COMMAND_GROUP)


class CommandDispatcher:
    """Route incoming messages and interactions to registered commands.

    Attributes:
        registry: Commands available to this dispatcher
        translator: Translator attached to contexts that have none
        config: Command settings (prefix, mention prefix, bot user ID)
        locale_resolver: Maps platform locale tags onto supported locales

    Example:
        dispatcher = CommandDispatcher(registry, translator)

        ctx = CommandContext(user_id="1", channel_id="2", guild_id="3")
        await dispatcher.handle_message("!ban <@4> 7 spam", ctx)
    """

    def __init__(
        self,
        registry: CommandRegistry,
        translator: Optional[Translator] = None,
        config: Optional[CommandsSettings] = None,
    ):
        self.registry = registry
        self.translator = translator
        self.config = config or settings.commands
        self.locale_resolver = LocaleResolver(
            LocaleResolver().resolve_from_platform(self.config.DEFAULT_LOCALE)
        )

    def prefixes(self) -> List[str]:
        """Accepted chat prefixes, longest first."""
        prefixes = [self.config.COMMAND_PREFIX]
        if self.config.MENTION_PREFIX and self.config.BOT_USER_ID:
            user_id = self.config.BOT_USER_ID
            prefixes.extend([f"<@{user_id}>", f"<@!{user_id}>"])
        return sorted(prefixes, key=len, reverse=True)

    def strip_prefix(self, content: str) -> Optional[str]:
        """Return the content after a known prefix, or None."""
        text = (content or "").lstrip()
        for prefix in self.prefixes():
            if text.startswith(prefix):
                return text[len(prefix) :]
        return None

    async def handle_message(self, content: str, context: CommandContext) -> bool:
        """Run the chat command in a message, if it holds one.

        Returns:
            True when a command (or help) ran, False when the message is not
            a known command
        """
        remainder = self.strip_prefix(content)
        if remainder is None:
            return False

        self._prepare_context(context)
        parser = StringParser(remainder)
        token = parser.parse_next()
        if token is None:
            return False

        command = self.registry.get_command(token.text)
        if command is not None and command.type is not CommandType.CHAT_INPUT:
            command = None
        if command is None:
            if token.text.lower() in HELP_COMMANDS:
                await context.respond(self.generate_help(context))
                return True
            logger.debug("unknown_chat_command", name=token.text)
            return False

        while command.subcommands:
            parser.mark()
            next_token = parser.parse_next()
            subcommand = command.find_subcommand(next_token.text) if next_token else None
            if subcommand is None:
                parser.restore()
                break
            parser.commit()
            command = subcommand

        await self._invoke(
            command,
            context,
            lambda: command.arguments.parse(context, parser),
            path="chat",
        )
        return True

    async def handle_interaction(
        self, payload: Mapping[str, Any], context: CommandContext
    ) -> bool:
        """Run the slash command described by an interaction payload.

        Args:
            payload: Interaction ``data`` object (``name``, ``type``,
                ``options``, ``resolved``, ``target_id``)
            context: Invocation context

        Returns:
            True when a command ran, False when the command is unknown
        """
        self._prepare_context(context)
        name = payload.get("name", "")
        command_type = CommandType(payload.get("type", CommandType.CHAT_INPUT))
        command = self.registry.get_command(name)
        if command is None or command.type is not command_type:
            logger.warning("unknown_slash_command", name=name)
            await context.respond_ephemeral(
                context.translate("commands.error.unknownCommand", command=name)
            )
            return False

        if command_type.is_context_menu:
            await self._invoke(
                command,
                context,
                lambda: _resolve_target(payload, command_type, context),
                path=command_type.name.lower(),
                ephemeral=True,
            )
            return True

        options = list(payload.get("options") or [])
        while options and OptionType(options[0]["type"]) in _GROUP_TYPES:
            subcommand = command.find_subcommand(options[0]["name"])
            if subcommand is None:
                logger.warning(
                    "unknown_slash_subcommand",
                    command=command.qualified_name,
                    name=options[0]["name"],
                )
                await context.respond_ephemeral(
                    context.translate(
                        "commands.error.unknownCommand",
                        command=f"{command.qualified_name} {options[0]['name']}",
                    )
                )
                return False
            command = subcommand
            options = list(options[0].get("options") or [])

        values = options_from_payload(options, payload.get("resolved"))
        await self._invoke(
            command,
            context,
            lambda: command.arguments.parse_options(context, values),
            path="slash",
            ephemeral=True,
        )
        return True

    def registration_payload(self) -> List[Dict[str, Any]]:
        """Application command definitions for every registered command.

        Raises:
            ConfigurationError: If a command cannot be expressed as a slash
                command
        """
        return [
            command.to_payload(self._localizations(command))
            for command in self.registry.list_commands()
        ]

    def generate_help(self, context: CommandContext) -> str:
        """Help text listing every command with its signature."""
        prefix = self.config.COMMAND_PREFIX
        lines = [context.translate("commands.help.title")]

        for command in self.registry.list_commands():
            if command.type is CommandType.CHAT_INPUT:
                lines.extend(self._help_lines(command, context, prefix))

        return "\n".join(lines)

    def _help_lines(
        self, command: Command, context: CommandContext, prefix: str
    ) -> List[str]:
        signature = command.arguments.signature(context)
        usage = f"{prefix}{command.qualified_name} {signature}".rstrip()
        lines = [f"\n`{usage}`"]

        description = command.describe(context)
        if description:
            lines.append(f"  {description}")

        for argument in command.arguments:
            lines.append(
                f"  `{argument.display_name}` ({argument.converter.signature(context)})"
                f" - {argument.describe(context)}"
            )

        if command.examples:
            lines.append(f"  {context.translate('commands.help.examples')}")
            for example in command.examples:
                lines.append(f"    `{prefix}{command.qualified_name} {example}`")

        for subcommand in command.subcommands.values():
            lines.extend(self._help_lines(subcommand, context, prefix))
        return lines

    def _localizations(self, command: Command) -> Dict[str, str]:
        if self.translator is None or not command.description_key:
            return {}

        key = TranslationKey.from_string(command.description_key)
        localizations = {}
        for locale in self.translator.get_available_locales():
            if locale in PLATFORM_LOCALES and self.translator.has_message(key, locale):
                localizations[PLATFORM_LOCALES[locale]] = self.translator.translate(
                    key, locale
                )
        return localizations

    def _prepare_context(self, context: CommandContext) -> None:
        if context.translator is None:
            context.translator = self.translator
        resolution = LocaleResolutionContext(
            user_locale=self.locale_resolver.match_platform(context.locale),
            guild_locale=self.locale_resolver.match_platform(context.guild_locale),
            default_locale=self.locale_resolver.default_locale,
        )
        context.locale = self.locale_resolver.resolve_from_context(resolution).value

    async def _invoke(
        self,
        command: Command,
        context: CommandContext,
        resolve_arguments: Callable[[], Awaitable[ParsedArguments]],
        path: str,
        ephemeral: bool = False,
    ) -> None:
        context.command = command

        with bind_request_context(
            correlation_id=context.correlation_id,
            user_id=context.user_id,
            guild_id=context.guild_id,
            channel_id=context.channel_id,
            command=command.qualified_name,
            path=path,
        ):
            try:
                await run_checks(_all_checks(command), context)
                arguments = await resolve_arguments()
                result = command.handler(context, **arguments.as_kwargs())
                if inspect.isawaitable(result):
                    await result
                logger.info("command_executed")
            except RelayedError as e:
                logger.info(
                    "command_relayed_error", error_type=type(e).__name__, error=e.message
                )
                await self._reply(context, e.message, ephemeral)
            except Exception as e:  # pylint: disable=broad-except
                logger.exception("unhandled_command_error", error=str(e))
                await self._reply(
                    context, context.translate("commands.error.internal"), ephemeral
                )

    async def _reply(self, context: CommandContext, text: str, ephemeral: bool) -> None:
        if ephemeral:
            await context.respond_ephemeral(text)
        else:
            await context.respond(text)


async def _resolve_target(
    payload: Mapping[str, Any], command_type: CommandType, context: CommandContext
) -> ParsedArguments:
    """The right-clicked user or message, as the ``target`` argument."""
    bucket = "users" if command_type is CommandType.USER else "messages"
    target_id = str(payload.get("target_id", ""))
    target = (payload.get("resolved") or {}).get(bucket, {}).get(target_id)
    if target is None:
        logger.warning("unresolved_command_target", bucket=bucket, target_id=target_id)
        raise RelayedError(context.translate("commands.error.targetMissing"))
    return ParsedArguments({"target": target})


def _all_checks(command: Command) -> List[Callable]:
    """Checks of the command's parents, then its own."""
    checks: List[Callable] = []
    chain = []
    current: Optional[Command] = command
    while current is not None:
        chain.append(current)
        current = current.parent
    for item in reversed(chain):
        checks.extend(item.checks)
    return checks
