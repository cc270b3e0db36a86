# ===== IMPORTS & DEPENDENCIES =====
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, List, Optional

from ragequit.core.account_store import AccountStore
from ragequit.core.lifecycle import ViewScope
from ragequit.core.session import SessionGate
from ragequit.models.account import RageEventRecord, UserClipRecord, VisitorSession
from ragequit.models.state import FavoriteState, RageEventForm, ClipForm
from ragequit.config import MIN_INTENSITY, MAX_INTENSITY
from ragequit.errors import AccountStoreError, ValidationFailure

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

LOGIN_REQUIRED = "Log in to do that."
FAVORITE_FAILED = "Could not update favorites. Try again."
RAGE_LOGGED = "Rage logged. Stay salty."
RAGE_FAILED = "Could not save your rage. Try again."
CLIP_ADDED = "Clip added!"
CLIP_FAILED = "Could not save your clip. Try again."


# ===== TYPES & INTERFACES =====
@dataclass
class OptimisticCommand:
    """A local change applied before the remote call, with the action that undoes it."""
    description: str
    apply: Callable[[], None]
    compensate: Callable[[], None]
    remote: Callable[[], Awaitable[Any]]


# ===== CORE BUSINESS LOGIC =====
class MutationCoordinator:
    """
    Writes new favorites, rage events and clips to the account store.

    Validation and the session check happen before any network call. Local
    state belongs to the view; once the view's scope is closed, late results
    no longer touch it.
    """

    def __init__(self, gate: SessionGate, store: AccountStore, scope: Optional[ViewScope] = None):
        self.gate = gate
        self.store = store
        self.scope = scope or ViewScope("mutations")

    def _require_visitor(self) -> VisitorSession:
        session = self.gate.session
        if session is None:
            raise ValidationFailure(LOGIN_REQUIRED)
        return session

    async def _run(self, command: OptimisticCommand) -> bool:
        command.apply()
        try:
            await command.remote()
        except AccountStoreError as e:
            logger.error(f"❌ [{self.__class__.__name__}] {command.description} failed, rolling back: {e}")
            self.scope.commit(command.compensate)
            return False
        except Exception:
            logger.error(f"❌ [{self.__class__.__name__}] {command.description} raised, rolling back.", exc_info=True)
            self.scope.commit(command.compensate)
            raise
        logger.info(f"✅ [{self.__class__.__name__}] {command.description} succeeded.")
        return True

    async def toggle_favorite(self, state: FavoriteState) -> bool:
        """Flips the favorite flag right away; restores it if the store rejects the change."""
        try:
            visitor = self._require_visitor()
        except ValidationFailure as e:
            state.error = str(e)
            return False
        if state.busy:
            return False

        previous = state.is_favorite
        target = not previous

        def apply() -> None:
            state.is_favorite = target
            state.busy = True
            state.error = None

        def compensate() -> None:
            state.is_favorite = previous
            state.error = FAVORITE_FAILED

        if target:
            remote = lambda: self.store.add_favorite(visitor.visitor_id, state.game_id)
        else:
            remote = lambda: self.store.remove_favorite(visitor.visitor_id, state.game_id)

        action = "add" if target else "remove"
        try:
            return await self._run(OptimisticCommand(
                description=f"Favorite {action} for game {state.game_id}",
                apply=apply,
                compensate=compensate,
                remote=remote,
            ))
        finally:
            self.scope.commit(setattr, state, 'busy', False)

    def _validate_intensity(self, intensity: Any) -> int:
        if isinstance(intensity, bool) or not isinstance(intensity, int):
            raise ValidationFailure("Intensity must be a whole number.")
        if not MIN_INTENSITY <= intensity <= MAX_INTENSITY:
            raise ValidationFailure(f"Intensity must be between {MIN_INTENSITY} and {MAX_INTENSITY}.")
        return intensity

    async def submit_rage_event(
        self,
        game_id: int,
        form: RageEventForm,
        events: Optional[List[RageEventRecord]] = None
    ) -> bool:
        """
        Stores a rage event. On success the form is cleared and the stored record
        is prepended to `events` when a local list is given.
        """
        form.message = None
        form.error = None
        try:
            visitor = self._require_visitor()
            intensity = self._validate_intensity(form.intensity)
        except ValidationFailure as e:
            form.error = str(e)
            return False

        form.submitting = True
        note = form.note.strip() or None
        try:
            record = await self.store.add_rage_event(visitor.visitor_id, game_id, intensity, note)
        except AccountStoreError as e:
            logger.error(f"❌ [{self.__class__.__name__}] Rage event for game {game_id} failed: {e}")
            self.scope.commit(self._finish, form, error=RAGE_FAILED)
            return False

        def on_success() -> None:
            form.clear()
            self._finish(form, message=RAGE_LOGGED)
            if events is not None:
                events.insert(0, record)

        self.scope.commit(on_success)
        return True

    async def submit_clip(self, game_id: int, form: ClipForm, clips: List[UserClipRecord]) -> bool:
        """
        Stores a clip link. On success the stored record is prepended to `clips`
        and the form is cleared; on failure both are left as they were.
        """
        form.message = None
        form.error = None
        try:
            visitor = self._require_visitor()
            url = form.url.strip()
            if not url:
                raise ValidationFailure("Paste a clip URL first.")
        except ValidationFailure as e:
            form.error = str(e)
            return False

        form.submitting = True
        title = form.title.strip() or None
        try:
            record = await self.store.add_user_clip(visitor.visitor_id, game_id, url, title)
        except AccountStoreError as e:
            logger.error(f"❌ [{self.__class__.__name__}] Clip for game {game_id} failed: {e}")
            self.scope.commit(self._finish, form, error=CLIP_FAILED)
            return False

        def on_success() -> None:
            clips.insert(0, record)
            form.clear()
            self._finish(form, message=CLIP_ADDED)

        self.scope.commit(on_success)
        return True

    @staticmethod
    def _finish(form, message: Optional[str] = None, error: Optional[str] = None) -> None:
        form.submitting = False
        form.message = message
        form.error = error
