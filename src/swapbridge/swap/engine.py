"""Swap execution engine with aggregator fallback.

Flow:
1. Tier 1: up to ``rounds`` passes over all aggregator modes, starting
   from the requested mode. Slippage rises by one step per failed round,
   capped at the hard ceiling. Rounds are separated by ``round_delay``.
2. Tier 2: a fresh routing-engine handle with an empty client identity
   (no client-scoped aggregator restrictions) tries each mode once with
   the original slippage, without pauses.
3. If both tiers fail, a single RoutingFailure carries both summaries.

Attempts are strictly sequential. Individual attempt errors are reported
to the event sink and never raised on their own.
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field, replace
from typing import Awaitable, Callable, Optional

from swapbridge.errors import DeadlineExpired, RoutingFailure
from swapbridge.routing.base import RoutingEngine, SwapResult
from swapbridge.swap.params import MAX_SLIPPAGE_BPS, AggregatorMode, SwapParams

logger = logging.getLogger(__name__)

# Fixed relative order; rounds rotate it so the requested mode goes first
AGGREGATOR_ORDER: list[AggregatorMode] = [
    AggregatorMode.BEST_RETURN,
    AggregatorMode.FASTEST,
    AggregatorMode.CHEAPEST,
    AggregatorMode.BEST_PRICE,
]

DEFAULT_ROUNDS = 3
DEFAULT_ROUND_DELAY = 2.0
DEFAULT_SLIPPAGE_STEP_BPS = 100

TIER_NORMAL = 1
TIER_FORCED = 2


@dataclass(frozen=True)
class AggregatorAttempt:
    """One call into the routing engine."""

    mode: AggregatorMode
    slippage_bps: int
    round_index: int  # 1-based
    tier: int = TIER_NORMAL


@dataclass(frozen=True)
class AttemptEvent:
    """Outcome record emitted for every attempt."""

    attempt: AggregatorAttempt
    status: str  # "started", "succeeded" or "failed"
    error: Optional[str] = None
    error_code: Optional[str] = None
    providers: tuple[str, ...] = ()


AttemptSink = Callable[[AttemptEvent], None]


class LoggingSink:
    """Default sink: writes attempt events to the module logger."""

    def __call__(self, event: AttemptEvent) -> None:
        attempt = event.attempt
        where = f"tier {attempt.tier} round {attempt.round_index} {attempt.mode.value} @ {attempt.slippage_bps}bps"
        if event.status == "started":
            logger.debug(f"Attempt {where}")
        elif event.status == "succeeded":
            logger.info(f"Swap computed on {where} via {', '.join(event.providers) or 'unknown route'}")
        else:
            logger.warning(f"Aggregator failed on {where}: {event.error}")


@dataclass
class ExecutionOutcome:
    """Successful execution: the result plus the attempt that produced it."""

    result: SwapResult
    attempt: AggregatorAttempt
    attempts_made: int
    failures: list[dict] = field(default_factory=list)

    @property
    def mode(self) -> AggregatorMode:
        return self.attempt.mode


def rotate_modes(requested: AggregatorMode) -> list[AggregatorMode]:
    """Aggregator order for one round, starting from ``requested``."""
    start = AGGREGATOR_ORDER.index(requested) if requested in AGGREGATOR_ORDER else 0
    return AGGREGATOR_ORDER[start:] + AGGREGATOR_ORDER[:start]


def escalated_slippage(
    original_bps: int,
    round_index: int,
    step_bps: int = DEFAULT_SLIPPAGE_STEP_BPS,
    cap_bps: int = MAX_SLIPPAGE_BPS,
) -> int:
    """Slippage for a 1-based round: +step per earlier round, capped."""
    return min(original_bps + (round_index - 1) * step_bps, cap_bps)


class ExecutionEngine:
    """Runs a swap computation against the routing engine with fallbacks.

    One instance serves one request. The primary handle is borrowed; the
    forced-fallback handle is created on demand and closed by the engine.
    """

    def __init__(
        self,
        primary: RoutingEngine,
        fallback_factory: Optional[Callable[[], RoutingEngine]] = None,
        rounds: int = DEFAULT_ROUNDS,
        round_delay: float = DEFAULT_ROUND_DELAY,
        slippage_step_bps: int = DEFAULT_SLIPPAGE_STEP_BPS,
        max_slippage_bps: int = MAX_SLIPPAGE_BPS,
        sink: Optional[AttemptSink] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.time,
    ):
        self.primary = primary
        self.fallback_factory = fallback_factory
        self.rounds = max(1, rounds)
        self.round_delay = round_delay
        self.slippage_step_bps = slippage_step_bps
        self.max_slippage_bps = max_slippage_bps
        self.sink: AttemptSink = sink or LoggingSink()
        self._sleep = sleep
        self._clock = clock
        self._attempts_made = 0

    async def execute(self, params: SwapParams) -> ExecutionOutcome:
        """
        Compute a swap using the two-tier policy.

        Raises:
            RoutingFailure: both tiers exhausted
            DeadlineExpired: the swap deadline passed before a success
        """
        self._attempts_made = 0
        failures: list[dict] = []

        logger.info(
            f"Executing swap {params.token_amount_in} (chain {params.token_amount_in.token.chain_id}) -> "
            f"{params.token_out.symbol} (chain {params.token_out.chain_id}), "
            f"mode={params.select_mode.value}, slippage={params.slippage_bps}bps"
        )

        outcome = await self._run_normal_tier(params, failures)
        if outcome is not None:
            return outcome

        tier1_summary = self._summarize(
            f"All aggregators failed after {self.rounds} round(s)",
            [f for f in failures if f["tier"] == TIER_NORMAL],
        )
        logger.warning(f"Normal flow failed, trying forced aggregators. {tier1_summary}")

        outcome = await self._run_forced_tier(params, failures)
        if outcome is not None:
            return outcome

        tier2_summary = self._summarize(
            "All forced aggregators failed",
            [f for f in failures if f["tier"] == TIER_FORCED],
        )
        logger.error(f"Swap routing failed in both tiers. {tier2_summary}")

        raise RoutingFailure(
            "Cross-chain swap could not be routed: every aggregator failed in normal and forced mode",
            tier1_summary=tier1_summary,
            tier2_summary=tier2_summary,
            attempts=failures,
            details={
                "aggregatorsAttempted": [mode.value for mode in AGGREGATOR_ORDER],
                "rounds": self.rounds,
                "originalSlippage": params.slippage_bps,
            },
        )

    async def execute_once(self, params: SwapParams) -> ExecutionOutcome:
        """Single attempt with the requested mode on the primary handle.

        Engine errors are decoded into the error taxonomy and raised.
        """
        from swapbridge.swap.formatter import decode_engine_error

        self._attempts_made = 0
        attempt = AggregatorAttempt(
            mode=params.select_mode, slippage_bps=params.slippage_bps, round_index=1
        )
        failures: list[dict] = []
        self._check_deadline(params)
        result = await self._attempt(self.primary, params, attempt, failures)
        if result is None:
            raise decode_engine_error(failures[-1]["exception"])
        return ExecutionOutcome(result=result, attempt=attempt, attempts_made=1)

    async def _run_normal_tier(
        self, params: SwapParams, failures: list[dict]
    ) -> Optional[ExecutionOutcome]:
        modes = rotate_modes(params.select_mode)

        for round_index in range(1, self.rounds + 1):
            slippage = escalated_slippage(
                params.slippage_bps, round_index, self.slippage_step_bps, self.max_slippage_bps
            )
            if round_index > 1:
                logger.info(f"Round {round_index}/{self.rounds}: slippage {slippage}bps ({slippage / 100}%)")

            for mode in modes:
                attempt = AggregatorAttempt(mode=mode, slippage_bps=slippage, round_index=round_index)
                self._check_deadline(params)
                result = await self._attempt(self.primary, params, attempt, failures)
                if result is not None:
                    if mode != params.select_mode:
                        logger.info(f"Succeeded with alternative aggregator: {params.select_mode.value} -> {mode.value}")
                    return ExecutionOutcome(result, attempt, self._attempts_made, failures)

            if round_index < self.rounds:
                logger.info(
                    f"All aggregators failed in round {round_index}, waiting {self.round_delay}s before next round"
                )
                await self._sleep(self.round_delay)

        return None

    async def _run_forced_tier(
        self, params: SwapParams, failures: list[dict]
    ) -> Optional[ExecutionOutcome]:
        if self.fallback_factory is None:
            logger.debug("No fallback factory configured, skipping forced aggregators")
            return None

        fallback = self.fallback_factory()
        try:
            for mode in AGGREGATOR_ORDER:
                attempt = AggregatorAttempt(
                    mode=mode, slippage_bps=params.slippage_bps, round_index=1, tier=TIER_FORCED
                )
                self._check_deadline(params)
                result = await self._attempt(fallback, params, attempt, failures)
                if result is not None:
                    return ExecutionOutcome(result, attempt, self._attempts_made, failures)
        finally:
            await fallback.aclose()
        return None

    async def _attempt(
        self,
        engine: RoutingEngine,
        params: SwapParams,
        attempt: AggregatorAttempt,
        failures: list[dict],
    ) -> Optional[SwapResult]:
        self._attempts_made += 1
        self.sink(AttemptEvent(attempt=attempt, status="started"))
        attempt_params = replace(params, select_mode=attempt.mode, slippage_bps=attempt.slippage_bps)

        try:
            result = await engine.compute_swap(attempt_params)
        except Exception as e:
            self.sink(AttemptEvent(
                attempt=attempt, status="failed", error=str(e), error_code=getattr(e, "code", None)
            ))
            failures.append({
                "tier": attempt.tier,
                "round": attempt.round_index,
                "mode": attempt.mode.value,
                "slippage": attempt.slippage_bps,
                "error": str(e),
                "exception": e,
            })
            return None

        self.sink(AttemptEvent(attempt=attempt, status="succeeded", providers=tuple(result.providers)))
        return result

    def _check_deadline(self, params: SwapParams) -> None:
        if self._clock() >= params.deadline:
            logger.warning(
                f"Swap deadline {params.deadline} passed after {self._attempts_made} attempt(s), giving up"
            )
            raise DeadlineExpired(params.deadline, self._attempts_made)

    @staticmethod
    def _summarize(headline: str, failures: list[dict]) -> str:
        if not failures:
            return headline
        tried = ", ".join(dict.fromkeys(f["mode"] for f in failures))
        last = failures[-1]
        return f"{headline}. Aggregators tried: {tried}. Last error ({last['mode']}): {last['error']}"
