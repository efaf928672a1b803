"""TelegramClient — event-driven transport via python-telegram-bot."""
import logging
from typing import Awaitable, Callable, Optional

from telegram import Update
from telegram.ext import Application, CommandHandler, ContextTypes
from telegram.ext import MessageHandler as TGMessageHandler
from telegram.ext import filters

from nutrition_decoder.chat import LabelChat
from nutrition_decoder.config import Config
from nutrition_decoder.constants import (
    CMD_ANALYZE,
    CMD_HELP,
    CMD_NEW,
    CMD_REMOVE,
    CMD_STATUS,
    DEFAULT_SOURCE_MEDIA_TYPE,
    MSG_BLOCKED_CHAT,
    MSG_HELP,
    MSG_IMAGE_READ_FAILED,
    MSG_SEND_FAIL,
)
from nutrition_decoder.models import SourceImage
from nutrition_decoder.telegram.typing import typing_action

logger = logging.getLogger(__name__)

# (sender, args) -> reply
OnCommand = Callable[[str, str], Awaitable[str]]


class TelegramClient:

    def __init__(self, config: Config, chat: LabelChat) -> None:
        self._token = config.telegram_bot_token
        self._allowed_chat_id = config.allowed_chat_id
        self._chat = chat
        self._app: Optional[Application] = None

    def run(self) -> None:
        match self._token:
            case None | "":
                raise ValueError("TELEGRAM_BOT_TOKEN must be set in .env")
            case _:
                pass

        self._app = Application.builder().token(self._token).build()
        self._app.add_handler(
            TGMessageHandler(filters.PHOTO | filters.Document.IMAGE, self._image_handler)
        )
        self._app.add_handler(
            CommandHandler(CMD_ANALYZE, self._make_command_handler(self._analyze, typing=True))
        )
        self._app.add_handler(CommandHandler(CMD_NEW, self._make_command_handler(self._new)))
        self._app.add_handler(CommandHandler(CMD_REMOVE, self._make_command_handler(self._remove)))
        self._app.add_handler(CommandHandler(CMD_STATUS, self._make_command_handler(self._status)))
        self._app.add_handler(CommandHandler(CMD_HELP, self._make_command_handler(self._help)))
        self._app.add_handler(CommandHandler("start", self._make_command_handler(self._help)))
        self._app.run_polling()

    async def send_message(self, to: str, text: str) -> bool:
        match self._app:
            case None:
                logger.error("send_message called before run()")
                return False
            case app:
                try:
                    await app.bot.send_message(chat_id=int(to), text=text)
                    return True
                except Exception as exc:
                    logger.error(MSG_SEND_FAIL, exc)
                    return False

    # ── helpers (also used in tests) ─────────────────────────────────────────

    def _is_allowed(self, update: Update) -> bool:
        match (update.effective_chat, self._allowed_chat_id):
            case (None, _):
                return False
            case (_, None):
                return True
            case (chat, allowed):
                return str(chat.id) == allowed

    @staticmethod
    async def _download_image(update: Update) -> Optional[SourceImage]:
        """Fetch the largest photo size, or an image sent as a document."""
        msg = update.message
        match (msg.photo if msg else None, msg.document if msg else None):
            case ([*_, largest], _):
                tg_file = await largest.get_file()
                media_type = DEFAULT_SOURCE_MEDIA_TYPE
            case (_, document) if document is not None:
                tg_file = await document.get_file()
                media_type = document.mime_type or DEFAULT_SOURCE_MEDIA_TYPE
            case _:
                return None
        data = bytes(await tg_file.download_as_bytearray())
        return SourceImage(data=data, media_type=media_type)

    # ── command callbacks ─────────────────────────────────────────────────────

    async def _analyze(self, sender: str, args: str) -> str:
        return await self._chat.handle_analyze(sender)

    async def _new(self, sender: str, args: str) -> str:
        return self._chat.handle_new(sender)

    async def _remove(self, sender: str, args: str) -> str:
        return self._chat.handle_remove(sender, args)

    async def _status(self, sender: str, args: str) -> str:
        return self._chat.handle_status(sender)

    async def _help(self, sender: str, args: str) -> str:
        return MSG_HELP

    # ── internal handler factory ──────────────────────────────────────────────

    def _make_command_handler(self, callback: OnCommand, typing: bool = False) -> Callable:
        async def _handler(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
            match self._is_allowed(update):
                case False:
                    chat_id = update.effective_chat.id if update.effective_chat else "?"
                    logger.warning(MSG_BLOCKED_CHAT, chat_id)
                    return
                case True:
                    pass

            sender = str(update.effective_chat.id)
            args = " ".join(context.args or [])
            match typing:
                case True:
                    async with typing_action(context.bot, sender):
                        reply = await callback(sender, args)
                case False:
                    reply = await callback(sender, args)
            await self.send_message(sender, reply)

        return _handler

    async def _image_handler(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        match self._is_allowed(update):
            case False:
                chat_id = update.effective_chat.id if update.effective_chat else "?"
                logger.warning(MSG_BLOCKED_CHAT, chat_id)
                return
            case True:
                pass

        sender = str(update.effective_chat.id)
        try:
            image = await self._download_image(update)
        except Exception:
            logger.exception("Image download failed")
            await self.send_message(sender, MSG_IMAGE_READ_FAILED)
            return

        match image:
            case None:
                return
            case img:
                await self.send_message(sender, self._chat.handle_image(sender, img))
