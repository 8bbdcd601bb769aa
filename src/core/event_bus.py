"""EventBus - 서비스 간 이벤트 통신

규칙:
- 이벤트는 식별자와 요약 값만 전달한다 (ORM 객체 금지)
- 전파 깊이 최대 MAX_DEPTH 단계
- 한 유스케이스(체인) 안에서 동일 source의 동일 이벤트는 한 번만
- 핸들러 예외는 로그만 남기고 발행자에게 전파하지 않는다
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Any, Set
from collections import defaultdict

from src.core.logging import get_logger

logger = get_logger(__name__)

MAX_DEPTH = 5  # 한 체인 내 이벤트 전파 최대 깊이


@dataclass
class GameEvent:
    """이벤트 데이터 컨테이너

    Args:
        event_type: 이벤트 유형 (EventTypes 상수)
        data: 이벤트 데이터 (ID 위주, 무거운 객체 금지)
        source: 발행한 모듈/서비스 이름
    """

    event_type: str
    data: Dict[str, Any]
    source: str

    # 내부 추적용 (외부에서 설정하지 않음)
    _depth: int = field(default=0, repr=False)


# 핸들러 타입: GameEvent를 받는 callable
EventHandler = Callable[[GameEvent], None]


class EventBus:
    """동기식 이벤트 버스

    사용 패턴:
        bus = EventBus()
        bus.subscribe(EventTypes.DAY_ADVANCED, on_day_advanced)
        bus.emit(GameEvent(event_type=EventTypes.DAY_ADVANCED, data={"player_id": "p1"}, source="sleep_service"))
        bus.reset_chain()  # 유스케이스 종료
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, List[EventHandler]] = defaultdict(list)
        self._global_handlers: List[EventHandler] = []  # 모든 이벤트 수신 (감사 로그 등)
        self._current_depth: int = 0
        self._emitted_in_chain: Set[str] = set()  # "source:event_type" 중복 방지

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        """이벤트 구독 등록"""
        self._handlers[event_type].append(handler)
        logger.debug(f"EventBus 구독: {event_type} → {handler.__qualname__}")

    def unsubscribe(self, event_type: str, handler: EventHandler) -> None:
        """이벤트 구독 해제"""
        if event_type in self._handlers:
            try:
                self._handlers[event_type].remove(handler)
                logger.debug(
                    f"EventBus 구독 해제: {event_type} → {handler.__qualname__}"
                )
            except ValueError:
                logger.warning(f"핸들러 미등록: {event_type} → {handler.__qualname__}")

    def subscribe_all(self, handler: EventHandler) -> None:
        """모든 이벤트 유형 구독 (유형별 핸들러 뒤에 호출)"""
        self._global_handlers.append(handler)

    def emit(self, event: GameEvent) -> None:
        """이벤트 발행. 등록된 핸들러를 동기 호출.

        안전장치:
        1. 전파 깊이 MAX_DEPTH 초과 시 무시
        2. 동일 source에서 동일 event_type 중복 발행 시 무시
        """
        # 깊이 체크
        if self._current_depth >= MAX_DEPTH:
            logger.warning(
                f"EventBus 전파 깊이 초과 ({MAX_DEPTH}): "
                f"{event.source}:{event.event_type} 무시됨"
            )
            return

        # 중복 체크
        chain_key = f"{event.source}:{event.event_type}"
        if chain_key in self._emitted_in_chain:
            logger.warning(f"EventBus 중복 이벤트 차단: {chain_key}")
            return

        self._emitted_in_chain.add(chain_key)
        event._depth = self._current_depth

        handlers = self._handlers.get(event.event_type, []) + self._global_handlers
        if not handlers:
            logger.debug(f"EventBus: {event.event_type} 구독자 없음")
            return

        logger.info(
            f"EventBus 전파: {event.event_type} (source={event.source}, "
            f"depth={self._current_depth}, handlers={len(handlers)})"
        )

        self._current_depth += 1
        try:
            for handler in handlers:
                try:
                    handler(event)
                except Exception:
                    logger.exception(
                        f"EventBus 핸들러 에러: {handler.__qualname__} "
                        f"(event={event.event_type})"
                    )
        finally:
            self._current_depth -= 1

    def reset_chain(self) -> None:
        """유스케이스 종료 시 호출. 중복 추적 초기화."""
        self._emitted_in_chain.clear()
        self._current_depth = 0

    def clear(self) -> None:
        """모든 구독 해제 (테스트용)"""
        self._handlers.clear()
        self._global_handlers.clear()
        self.reset_chain()

    @property
    def handler_count(self) -> int:
        """등록된 총 핸들러 수"""
        return sum(len(h) for h in self._handlers.values()) + len(self._global_handlers)


def log_event(event: GameEvent) -> None:
    """subscribe_all용 이벤트 기록 핸들러 (DEBUG)"""
    logger.debug(f"Event: {event.source}:{event.event_type} {event.data}")
