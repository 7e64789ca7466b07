"""
Локальный контроллер партии: игра вдвоём за одним экраном и против эвристики.

Владеет состоянием партии, таймером вытеснения и отложенным ходом соперника.
Наблюдатели получают неизменяемый снимок только после завершённой мутации.
"""
import logging
import random
from collections.abc import Callable, Sequence

from .config import get_config
from .constants import EVICTION_THRESHOLD, O, X, GameMode, GameStatus, Scores, Variant, empty_scores
from .errors import OpponentFailure
from .game import GameSnapshot, GameState
from .opponent import select_move
from .scheduler import AsyncioScheduler, Handle, Repeating, Scheduler

logger = logging.getLogger(__name__)

Opponent = Callable[[Sequence[str | None], str, str, random.Random], int | None]
Listener = Callable[[GameSnapshot], None]


class LocalGameController:
    def __init__(
        self,
        mode: GameMode = GameMode.LOCAL,
        variant: Variant = Variant.ENDLESS,
        scheduler: Scheduler | None = None,
        opponent: Opponent = select_move,
        rng: random.Random | None = None,
        eviction_interval: float | None = None,
        ai_delay: float | None = None,
    ):
        config = get_config()
        self.mode = GameMode(mode)
        self.variant = Variant(variant)
        self.human = X
        self.ai = O
        self.opponent_error = False
        self._scheduler = scheduler or AsyncioScheduler()
        self._opponent = opponent
        self._rng = rng or random.Random()
        self._ai_delay = config.ai_delay if ai_delay is None else ai_delay
        self._eviction = Repeating(
            self._scheduler,
            config.eviction_interval if eviction_interval is None else eviction_interval,
            self._on_eviction_tick,
        )
        self._scores_by_mode: dict[GameMode, Scores] = {m: empty_scores() for m in GameMode}
        self._pending_ai: Handle | None = None
        self._generation = 0
        self._listeners: list[Listener] = []
        self.state = self._new_state()

    def _new_state(self) -> GameState:
        return GameState(variant=self.variant, scores=self._scores_by_mode[self.mode])

    # --- чтение ---

    @property
    def snapshot(self) -> GameSnapshot:
        return self.state.snapshot()

    @property
    def status(self) -> GameStatus:
        return self.state.status

    @property
    def scores(self) -> Scores:
        return dict(self.state.scores)

    @property
    def eviction_running(self) -> bool:
        return self._eviction.running

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # --- намерения ---

    def start(self) -> None:
        if self.state.status is not GameStatus.IDLE:
            return
        self.state.active = True
        logger.info("controller: %s game started (%s)", self.mode.value, self.variant.value)
        self._after_change()

    def place_move(self, index) -> bool:
        """Ход текущего игрока. False — ход отклонён, состояние не изменилось."""
        if self.mode is GameMode.AI and self.state.current_player != self.human:
            logger.debug("controller: rejected %s, not human turn", index)
            return False
        placement = self.state.place(index, self.state.current_player)
        if placement is None:
            logger.debug("controller: rejected move %s", index)
            return False
        self._log_placement(placement)
        self._after_change()
        return True

    def reset(self) -> None:
        """Новая партия в том же режиме. Счёт не трогаем."""
        self._cancel_pending()
        self.opponent_error = False
        self.state.reset()
        logger.info("controller: %s game reset", self.mode.value)
        self._after_change()

    def reset_scores(self) -> None:
        self.state.reset_scores()
        self.reset()

    def reset_all_scores(self) -> None:
        for scores in self._scores_by_mode.values():
            scores["X"] = 0
            scores["O"] = 0
        self.reset()

    def switch_mode(self, mode: GameMode) -> None:
        """Старая партия уничтожается, новая ждёт start()."""
        self._cancel_pending()
        self.opponent_error = False
        self.mode = GameMode(mode)
        self.state = self._new_state()
        logger.info("controller: switched to %s", self.mode.value)
        self._publish()

    def resume_opponent(self) -> None:
        """Повторить ход соперника после сбоя."""
        if not self.opponent_error:
            return
        self.opponent_error = False
        self._schedule_opponent()
        self._publish()

    def close(self) -> None:
        self._cancel_pending()

    # --- внутреннее ---

    def _cancel_pending(self) -> None:
        self._generation += 1
        self._eviction.stop()
        if self._pending_ai is not None:
            self._pending_ai.cancel()
            self._pending_ai = None

    def _after_change(self) -> None:
        self._sync_eviction()
        self._schedule_opponent()
        self._publish()

    def _publish(self) -> None:
        snapshot = self.state.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)

    def _sync_eviction(self) -> None:
        s = self.state
        if (
            self.variant is Variant.ENDLESS
            and s.active
            and s.winner is None
            and len(s.ledger) > 0
            and s.occupied >= EVICTION_THRESHOLD
        ):
            self._eviction.start()
        else:
            self._eviction.stop()

    def _on_eviction_tick(self) -> None:
        move = self.state.evict_oldest()
        if move is not None:
            logger.info("FIFO: removed %s from %s", move.symbol, move.index)
        self._sync_eviction()
        self._publish()

    def _schedule_opponent(self) -> None:
        s = self.state
        if (
            self.mode is not GameMode.AI
            or not s.active
            or s.current_player != self.ai
            or self._pending_ai is not None
            or self.opponent_error
        ):
            return
        generation = self._generation
        self._pending_ai = self._scheduler.call_later(
            self._ai_delay, lambda: self._run_opponent(generation)
        )

    def _run_opponent(self, generation: int) -> None:
        self._pending_ai = None
        s = self.state
        if generation != self._generation or not s.active or s.current_player != self.ai:
            logger.debug("controller: stale opponent move discarded")
            return
        for attempt in (1, 2):
            try:
                index = self._opponent(tuple(s.board), self.ai, self.human, self._rng)
                if index is None:
                    raise OpponentFailure("opponent returned no move")
                placement = s.place(index, self.ai)
                if placement is None:
                    raise OpponentFailure("opponent chose illegal cell", context={"index": index})
                break
            except Exception as e:
                if attempt == 1:
                    logger.warning("controller: opponent failed (%s), retrying", e)
                    continue
                logger.exception("controller: opponent failed twice, waiting for resume")
                self.opponent_error = True
                self._publish()
                return
        self._log_placement(placement)
        self._after_change()

    def _log_placement(self, placement) -> None:
        if placement.evicted is not None:
            logger.info("FIFO: %s overflow, removed %s", placement.symbol, placement.evicted.index)
        if placement.winner is not None:
            logger.info("controller: %s wins on %s", placement.winner, placement.winning_line)
        elif placement.is_draw:
            logger.info("controller: draw")
