"""Studio controller: request/response wiring for both assistant panels.

Hides the orchestration of one request:
- Session bookkeeping (user turn, in-flight turn, busy flag)
- Prompt and context assembly for the provider
- Folding the fragment stream through the interpreter
- Editor, tab and asset library side effects
- Turning provider failures into fixed chat messages
"""

import logging

from ..llm import ChatMessage, GenerationResult, LLMProvider, ProviderNotConfiguredError
from ..prompts import build_image_prompt, get_asset_consultant_prompt, get_code_system_prompt
from .assets import AssetLibrary, AssetRecord, classify_asset_response
from .events import NullListener, StudioListener, StudioTab
from .intent import IntentPredicate, has_code_intent, wants_image
from .interpreter import StreamedCodeBlockInterpreter
from .session import ChatRole, ChatSession, ChatTurn
from .settings import StudioSettings, create_role_provider

logger = logging.getLogger(__name__)

# Low randomness favors deterministic code output
CODE_TEMPERATURE = 0.2

STREAM_FAILURE_MESSAGE = "Error connecting to AI Service."
ASSET_FAILURE_MESSAGE = "Failed to process asset request."
IMAGE_FAILURE_MESSAGE = "I tried to generate an image but encountered an error. Please try again."
EMPTY_ASSET_REPLY = "I couldn't process that request."

CODE_WELCOME = (
    "Hello! I'm your Coding Assistant. I can help you write scripts, debug code, "
    "or optimize your game logic. What are we building?"
)
ASSET_WELCOME = (
    "Hi! I'm your Asset Architect. I can generate 2D sprites, describe 3D models, "
    "or suggest sound effects. Try asking for a 'cyberpunk sword sprite'."
)

DEFAULT_CODE = """import { Engine, Scene, Vector3 } from 'game-engine';

class PlayerController extends Component {
  speed: number = 10;

  start() {
    console.log("Player Initialized");
  }

  update(deltaTime: number) {
    // Basic movement logic
    const input = Input.getAxis("Horizontal");
    this.transform.position.x += input * this.speed * deltaTime;
  }
}
"""


class StudioController:
    """Owns the studio's view state and issues requests to the providers.

    The two sessions are independent: each admits one outstanding request,
    and a code request and an asset request may run concurrently.
    """

    def __init__(
        self,
        code_llm: LLMProvider,
        asset_llm: LLMProvider,
        settings: StudioSettings | None = None,
        listener: StudioListener | None = None,
        editor_text: str = DEFAULT_CODE,
        code_intent: IntentPredicate = has_code_intent,
        welcome: bool = True,
    ) -> None:
        self._code_llm = code_llm
        self._asset_llm = asset_llm
        self._settings = settings or StudioSettings()
        self._listener = listener or NullListener()
        self._code_intent = code_intent
        self._editor_text = editor_text
        self._active_tab = StudioTab.CODE

        self.code_session = ChatSession("code")
        self.asset_session = ChatSession("assets")
        self.library = AssetLibrary()

        if welcome:
            self.code_session.add_turn(ChatRole.ASSISTANT, CODE_WELCOME)
            self.asset_session.add_turn(ChatRole.ASSISTANT, ASSET_WELCOME)

    @property
    def settings(self) -> StudioSettings:
        return self._settings

    @property
    def code_llm(self) -> LLMProvider:
        return self._code_llm

    @property
    def asset_llm(self) -> LLMProvider:
        return self._asset_llm

    @property
    def editor_text(self) -> str:
        return self._editor_text

    @property
    def active_tab(self) -> StudioTab:
        return self._active_tab

    def set_listener(self, listener: StudioListener) -> None:
        self._listener = listener

    def set_editor_text(self, text: str, notify: bool = True) -> None:
        """Replace the editor buffer. Pass notify=False for edits made in the editor itself."""
        self._editor_text = text
        if notify:
            self._listener.on_editor_changed(text)

    def set_active_tab(self, tab: StudioTab) -> None:
        self._active_tab = tab
        self._listener.on_tab_changed(tab)

    async def apply_settings(self, settings: StudioSettings) -> None:
        """Swap in new settings and rebuild both providers from them."""
        old = (self._code_llm, self._asset_llm)
        self._code_llm = create_role_provider(settings.code_ai, settings.gemini_api_key)
        self._asset_llm = create_role_provider(settings.asset_ai, settings.gemini_api_key)
        self._settings = settings
        logger.info(
            "Settings applied: code=%s/%s asset=%s/%s",
            settings.code_ai.provider.value, settings.code_ai.model,
            settings.asset_ai.provider.value, settings.asset_ai.model,
        )
        for provider in old:
            await provider.close()

    async def send_code_message(self, text: str) -> ChatTurn | None:
        """Stream a code-assistant response for ``text``.

        Returns:
            The assistant turn, or None if the text was blank

        Raises:
            SessionBusyError: If the code session already has a request in flight
        """
        if not text.strip():
            return None

        session = self.code_session
        user_turn = session.begin(text)
        self._listener.on_turn_added(session, user_turn)
        self._listener.on_busy_changed(session, True)

        try:
            history = session.history_for_provider(before=user_turn)
            turn = session.open_response()
            self._listener.on_turn_added(session, turn)

            try:
                messages = [
                    ChatMessage(role="system", content=get_code_system_prompt(self._editor_text)),
                    *history,
                    ChatMessage(role="user", content=text),
                ]
                interpreter = StreamedCodeBlockInterpreter(text, code_intent=self._code_intent)
                logger.info("Code request (%d history turns): %s", len(history), text[:50])

                stream = await self._code_llm.chat_completion_stream(
                    messages, temperature=CODE_TEMPERATURE
                )
                async for step in interpreter.stream(stream):
                    session.update_response(step.display_text)
                    self._listener.on_turn_updated(session, turn)
                    if step.activate_code_view:
                        logger.info("Code block extracted (%d chars)", len(step.code))
                        self.set_editor_text(step.code)
                        self.set_active_tab(StudioTab.CODE)
            except Exception as e:
                logger.error("Code stream failed: %s", e)
                session.close_response(STREAM_FAILURE_MESSAGE, failed=True)
            else:
                session.close_response()

            self._listener.on_turn_updated(session, turn)
            return turn
        finally:
            # A listener error can escape before the stream is reached
            if session.pending_turn is not None:
                session.close_response(STREAM_FAILURE_MESSAGE, failed=True)
            session.release()
            self._listener.on_busy_changed(session, False)

    async def send_asset_message(self, text: str) -> ChatTurn | None:
        """Run one asset round for ``text``.

        Returns:
            The assistant turn, or None if the text was blank

        Raises:
            SessionBusyError: If the asset session already has a request in flight
        """
        if not text.strip():
            return None

        session = self.asset_session
        user_turn = session.begin(text)
        self._listener.on_turn_added(session, user_turn)
        self._listener.on_busy_changed(session, True)

        try:
            try:
                result = await self._generate_asset(text)
            except Exception as e:
                logger.error("Asset request failed: %s", e)
                turn = session.add_turn(ChatRole.ASSISTANT, ASSET_FAILURE_MESSAGE, failed=True)
                self._listener.on_turn_added(session, turn)
                return turn

            images = [result.image_url] if result.image_url else []
            turn = session.add_turn(ChatRole.ASSISTANT, result.text, images=images)
            self._listener.on_turn_added(session, turn)

            record = classify_asset_response(text, result, library_size=len(self.library))
            if record is not None:
                self._add_asset(record)
            return turn
        finally:
            session.release()
            self._listener.on_busy_changed(session, False)

    def _add_asset(self, record: AssetRecord) -> None:
        self.library.add(record)
        logger.info("Asset added: %s (%s)", record.name, record.category.value)
        self._listener.on_asset_added(record)
        self.set_active_tab(StudioTab.ASSETS)

    async def _generate_asset(self, text: str) -> GenerationResult:
        if wants_image(text):
            try:
                return await self._asset_llm.generate_image(build_image_prompt(text))
            except ProviderNotConfiguredError:
                raise
            except Exception as e:
                logger.error("Image generation failed: %s", e)
                return GenerationResult(text=IMAGE_FAILURE_MESSAGE)

        response = await self._asset_llm.chat_completion(
            [
                ChatMessage(role="system", content=get_asset_consultant_prompt()),
                ChatMessage(role="user", content=text),
            ],
            model=self._settings.asset_text_model,
        )
        return GenerationResult(text=response.content or EMPTY_ASSET_REPLY)
