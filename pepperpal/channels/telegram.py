"""Telegram channel implementation using python-telegram-bot."""

from __future__ import annotations

import asyncio
import re
from typing import Any

from loguru import logger
from telegram import BotCommand, LinkPreviewOptions, ReplyParameters, Update
from telegram.constants import ChatAction, ChatType
from telegram.ext import Application, CommandHandler, ContextTypes, MessageHandler, filters
from telegram.request import HTTPXRequest

from pepperpal.bus.events import InboundMessage, OutboundMessage
from pepperpal.constants import ADMIN_ONLY, SPLIT_THRESHOLD, VERIFIED_FACTS
from pepperpal.service import ChatService
from pepperpal.templates.quick import QUICK_COMMANDS, QUICK_DESCRIPTIONS, quick_reply

MAX_CHUNKS = 10
NO_PREVIEW = LinkPreviewOptions(is_disabled=True)

START_TEXT = (
    "Hey {name}! Welcome to Pepper Pal, your community assistant for Peppercoin on Chiliz Chain.\n\n"
    "I can help you with:\n"
    "- How Peppercoin works and how to get started\n"
    "- Tokenomics and supply information\n"
    "- Pepper Inc governance and staking\n"
    "- Finding official resources and links\n\n"
    "Quick start:\n"
    "/ask [your question] - Ask me anything about Peppercoin\n"
    "/help - See all available commands\n\n"
    "Example: /ask how do I buy PEPPER?\n\n"
    f"Website: {VERIFIED_FACTS['WEBSITE']}\n"
    f"Telegram: {VERIFIED_FACTS['TELEGRAM']}"
)

HELP_TEXT = (
    "Pepper Pal commands\n\n"
    "/start - Introduction\n"
    "/ask [question] - Ask about Peppercoin\n"
    "/help - Show this help\n\n"
    "Quick info:\n"
    + "".join(f"/{name} - {desc}\n" for name, desc in QUICK_DESCRIPTIONS.items())
    + "\n"
    "In groups, mention me or reply to one of my messages.\n"
    "I share official information only: no price predictions or investment advice."
)


def _find_split_point(text: str, max_length: int) -> int:
    segment = text[:max_length]

    paragraph = segment.rfind("\n\n")
    if paragraph > max_length * 0.4:
        return paragraph + 2

    newline = segment.rfind("\n")
    if newline > max_length * 0.5:
        return newline + 1

    sentence = max(segment.rfind(end) for end in (". ", "! ", "? "))
    if sentence > max_length * 0.5:
        return sentence + 2

    space = segment.rfind(" ")
    if space > max_length * 0.7:
        return space + 1

    return max_length


def split_message(text: str, threshold: int = SPLIT_THRESHOLD) -> list[str]:
    """Split a reply into Telegram-sized chunks.

    Prefers paragraph breaks, then line breaks, then sentence ends, then
    spaces. Every chunk is at most *threshold* characters.
    """
    if not text or len(text) <= threshold:
        return [text] if text else []

    chunks: list[str] = []
    remaining = text
    while remaining:
        if len(remaining) <= threshold:
            chunks.append(remaining.strip())
            break
        if len(chunks) >= MAX_CHUNKS - 1:
            logger.warning(f"Reply needs more than {MAX_CHUNKS} chunks, cutting")
            chunks.append(remaining[:threshold].strip())
            break
        point = _find_split_point(remaining, threshold)
        chunks.append(remaining[:point].strip())
        remaining = remaining[point:].strip()

    return [c for c in chunks if c]


def is_addressed_to_bot(
    text: str, chat_type: str, bot_username: str, *, replies_to_bot: bool = False
) -> bool:
    """Private chats always; groups only on a mention or a reply to the bot."""
    if chat_type == ChatType.PRIVATE:
        return True
    if replies_to_bot:
        return True
    if not bot_username or not text:
        return False
    return re.search(rf"@{re.escape(bot_username)}\b", text, re.IGNORECASE) is not None


class TelegramChannel:
    """
    Telegram channel using long polling.

    Simple and reliable - no webhook/public IP needed.
    """

    name = "telegram"

    BOT_COMMANDS = [
        BotCommand("start", "Introduction"),
        BotCommand("ask", "Ask about Peppercoin"),
        BotCommand("help", "Show available commands"),
        *(BotCommand(name, desc) for name, desc in QUICK_DESCRIPTIONS.items()),
    ]

    def __init__(self, token: str, service: ChatService, *, proxy: str | None = None):
        self.token = token
        self.service = service
        self.proxy = proxy
        self._app: Application | None = None
        self._running = False
        self._bot_username = service.bot_username
        self._bot_id: int | None = None
        self._typing_tasks: dict[str, asyncio.Task] = {}  # chat_id -> typing loop task

    async def start(self) -> None:
        """Start the Telegram bot with long polling."""
        if not self.token:
            logger.error("Telegram bot token not configured")
            return

        self._running = True

        # Larger connection pool avoids pool timeouts on long runs
        req = HTTPXRequest(connection_pool_size=16, pool_timeout=5.0, connect_timeout=30.0, read_timeout=30.0)
        builder = Application.builder().token(self.token).request(req).get_updates_request(req)
        if self.proxy:
            builder = builder.proxy(self.proxy).get_updates_proxy(self.proxy)
        self._app = builder.build()
        self._app.add_error_handler(self._on_error)

        self._app.add_handler(CommandHandler("start", self._on_start))
        self._app.add_handler(CommandHandler("help", self._on_help))
        self._app.add_handler(CommandHandler("ask", self._on_ask))
        self._app.add_handler(CommandHandler(list(QUICK_COMMANDS), self._on_quick))
        self._app.add_handler(CommandHandler("stats", self._on_stats))
        self._app.add_handler(CommandHandler("health", self._on_health))
        self._app.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, self._on_message))

        logger.info("Starting Telegram bot (polling mode)...")

        await self._app.initialize()
        await self._app.start()

        bot_info = await self._app.bot.get_me()
        self._bot_id = bot_info.id
        if bot_info.username:
            self._bot_username = bot_info.username
        logger.info(f"Telegram bot @{bot_info.username} connected")

        try:
            await self._app.bot.set_my_commands(self.BOT_COMMANDS)
            logger.debug("Telegram bot commands registered")
        except Exception as e:
            logger.warning(f"Failed to register bot commands: {e}")

        self.service.start()

        await self._app.updater.start_polling(
            allowed_updates=["message"],
            drop_pending_updates=True,  # Ignore old messages on startup
        )

        while self._running:
            await asyncio.sleep(1)

    async def stop(self) -> None:
        """Stop the Telegram bot."""
        self._running = False
        await self.service.stop()

        for chat_id in list(self._typing_tasks):
            self._stop_typing(chat_id)

        if self._app:
            logger.info("Stopping Telegram bot...")
            await self._app.updater.stop()
            await self._app.stop()
            await self._app.shutdown()
            self._app = None

    async def send(self, msg: OutboundMessage) -> None:
        """Send a reply, split across messages when it is too long."""
        if not self._app:
            logger.warning("Telegram bot not running")
            return

        self._stop_typing(msg.chat_id)

        try:
            chat_id = int(msg.chat_id)
        except ValueError:
            logger.error(f"Invalid chat_id: {msg.chat_id}")
            return

        for i, chunk in enumerate(split_message(msg.content)):
            reply_to = int(msg.reply_to) if i == 0 and msg.reply_to else None
            await self._send_single(chat_id, chunk, reply_to=reply_to, parse_mode=msg.parse_mode)

    async def _send_single(
        self, chat_id: int, text: str, *, reply_to: int | None = None, parse_mode: str | None = None
    ) -> None:
        try:
            await self._app.bot.send_message(
                chat_id=chat_id,
                text=text,
                parse_mode=parse_mode,
                reply_parameters=ReplyParameters(message_id=reply_to) if reply_to else None,
                link_preview_options=NO_PREVIEW,
            )
        except Exception as e:
            logger.error(f"Error sending Telegram message: {e}")

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    @staticmethod
    def _inbound(update: Update, content: str) -> InboundMessage:
        message = update.message
        user = update.effective_user
        return InboundMessage(
            channel="telegram",
            sender_id=str(user.id),
            chat_id=str(message.chat_id),
            content=content,
            chat_type="private" if message.chat.type == ChatType.PRIVATE else "group",
            message_id=str(message.message_id),
            metadata={"username": user.username, "first_name": user.first_name},
        )

    @staticmethod
    def _from_bot(update: Update) -> bool:
        user = update.effective_user
        return user is None or bool(user.is_bot)

    async def _on_start(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        if not update.message or self._from_bot(update):
            return
        name = update.effective_user.first_name or "there"
        await self._reply_text(update, START_TEXT.format(name=name))

    async def _on_help(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        if not update.message or self._from_bot(update):
            return
        await self._reply_text(update, HELP_TEXT)

    async def _on_ask(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """``/ask <question>`` goes through the same service path as plain messages."""
        if not update.message or self._from_bot(update):
            return
        question = " ".join(context.args or [])
        await self._dispatch(update, question, ask=True)

    async def _on_quick(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Static answers for the quick-info commands; no pipeline involved."""
        if not update.message or self._from_bot(update):
            return
        parts = (update.message.text or "").split(maxsplit=1)
        command = parts[0] if parts else ""
        text = quick_reply(command)
        if text is None:
            return
        logger.info(f"Quick command {command} from {update.effective_user.id}")
        await self._reply_text(update, text)

    async def _on_stats(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        await self._admin_reply(update, "stats")

    async def _on_health(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        await self._admin_reply(update, "health")

    async def _admin_reply(self, update: Update, kind: str) -> None:
        if not update.message or self._from_bot(update):
            return
        user_id = update.effective_user.id
        if not self.service.is_admin(user_id):
            logger.warning(f"Non-admin {user_id} tried /{kind}")
            await self._reply_text(update, ADMIN_ONLY)
            return
        report = self.service.stats_report() if kind == "stats" else self.service.health_report()
        logger.info(f"Admin {user_id} ran /{kind}")
        await self._reply_text(update, report)

    async def _on_message(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        if not update.message or self._from_bot(update):
            return

        message = update.message
        reply = message.reply_to_message
        replies_to_bot = bool(
            reply and reply.from_user and self._bot_id is not None and reply.from_user.id == self._bot_id
        )
        if not is_addressed_to_bot(
            message.text or "", message.chat.type, self._bot_username, replies_to_bot=replies_to_bot
        ):
            return

        await self._dispatch(update, message.text or "")

    async def _dispatch(self, update: Update, content: str, *, ask: bool = False) -> None:
        inbound = self._inbound(update, content)
        self._start_typing(inbound.chat_id)
        try:
            outbound = await (self.service.ask(inbound) if ask else self.service.handle(inbound))
        finally:
            self._stop_typing(inbound.chat_id)
        if outbound is not None:
            await self.send(outbound)

    async def _reply_text(self, update: Update, text: str) -> None:
        try:
            await update.message.reply_text(text, link_preview_options=NO_PREVIEW)
        except Exception as e:
            logger.error(f"Error sending Telegram message: {e}")

    # ------------------------------------------------------------------
    # Typing indicator
    # ------------------------------------------------------------------

    def _start_typing(self, chat_id: str) -> None:
        """Start sending 'typing...' indicator for a chat."""
        self._stop_typing(chat_id)
        self._typing_tasks[chat_id] = asyncio.create_task(self._typing_loop(chat_id))

    def _stop_typing(self, chat_id: str) -> None:
        task = self._typing_tasks.pop(chat_id, None)
        if task and not task.done():
            task.cancel()

    async def _typing_loop(self, chat_id: str) -> None:
        """Repeatedly send 'typing' action until cancelled."""
        try:
            while self._app:
                await self._app.bot.send_chat_action(chat_id=int(chat_id), action=ChatAction.TYPING)
                await asyncio.sleep(4)
        except asyncio.CancelledError:
            pass
        except Exception as e:
            logger.debug(f"Typing indicator stopped for {chat_id}: {e}")

    async def _on_error(self, update: Any, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Log polling / handler errors instead of silently swallowing them."""
        logger.error(f"Telegram error: {context.error}")
