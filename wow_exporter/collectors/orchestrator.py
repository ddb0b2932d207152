"""
Collection orchestrator.

Runs every metric group once per scrape. Each group writes into its own
batch under a timeout; a group that raises or times out is logged and its
batch dropped, so its gauges keep their last published values. The
batches of the groups that succeeded are committed to the registry in a
single swap at the end of the cycle.
"""
from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass, field

from wow_exporter.api.metrics import ExporterInstruments
from wow_exporter.collectors.accounts import AccountGroup, BannedCharacterGroup, GMAccountGroup
from wow_exporter.collectors.base import AccountNameCache, CollectionContext, MetricGroup
from wow_exporter.collectors.battlegrounds import BattlegroundGroup
from wow_exporter.collectors.chat import ChatLogGroup
from wow_exporter.collectors.economy import AuctionGroup, GuildGroup
from wow_exporter.collectors.instances import InstanceGroup
from wow_exporter.collectors.mail import MailGroup, UnreadMailGroup
from wow_exporter.collectors.network import NetworkGroup
from wow_exporter.collectors.players import MaxLevelCharacterGroup, PlayerDemographicsGroup
from wow_exporter.collectors.server import LastRestartGroup, ServerUptimeGroup
from wow_exporter.db.session import DataSource
from wow_exporter.metric_store.registry import MetricRegistry

logger = logging.getLogger(__name__)

DEFAULT_GROUP_TIMEOUT = 10.0


def default_groups() -> list[MetricGroup]:
    return [
        PlayerDemographicsGroup(),
        MailGroup(),
        AccountGroup(),
        ServerUptimeGroup(),
        AuctionGroup(),
        GuildGroup(),
        MaxLevelCharacterGroup(),
        UnreadMailGroup(),
        GMAccountGroup(),
        LastRestartGroup(),
        BannedCharacterGroup(),
        ChatLogGroup(),
        InstanceGroup(),
        NetworkGroup(),
        BattlegroundGroup(),
    ]


@dataclass
class CycleReport:
    published: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)
    duration_seconds: float = 0.0


class CollectionOrchestrator:
    def __init__(
        self,
        source: DataSource,
        registry: MetricRegistry,
        groups: Sequence[MetricGroup] | None = None,
        *,
        timeout: float = DEFAULT_GROUP_TIMEOUT,
        realm_id: int = 1,
        instruments: ExporterInstruments | None = None,
    ):
        self.source = source
        self.registry = registry
        self.groups = list(groups) if groups is not None else default_groups()
        self.timeout = timeout
        self.realm_id = realm_id
        self.instruments = instruments

        names = [group.name for group in self.groups]
        if len(set(names)) != len(names):
            raise ValueError(f"duplicate metric group names: {names}")
        for group in self.groups:
            for definition in group.metrics:
                registry.register(definition)

    async def run_cycle(self) -> CycleReport:
        """One best-effort pass over every group, committed atomically."""
        t_start = time.perf_counter()
        report = CycleReport()
        # username cache lives for this cycle only
        accounts = AccountNameCache(self.source)
        cycle_batch = self.registry.batch()

        for group in self.groups:
            ctx = CollectionContext(
                source=self.source,
                batch=self.registry.batch(),
                accounts=accounts,
                realm_id=self.realm_id,
            )
            group_start = time.perf_counter()
            try:
                for definition in group.metrics:
                    ctx.batch.reset(definition)
                await asyncio.wait_for(group.collect(ctx), timeout=self.timeout)
            except asyncio.TimeoutError:
                self._record_failure(report, group, f"timed out after {self.timeout:g}s")
            except Exception as exc:
                self._record_failure(report, group, f"{type(exc).__name__}: {exc}")
            else:
                cycle_batch.extend(ctx.batch)
                report.published.append(group.name)
            finally:
                if self.instruments is not None:
                    self.instruments.group_duration.labels(group=group.name).observe(
                        time.perf_counter() - group_start
                    )

        self.registry.commit(cycle_batch)
        report.duration_seconds = time.perf_counter() - t_start
        logger.debug(
            "Collection cycle finished in %.3fs: %d published, failed=%s",
            report.duration_seconds, len(report.published), sorted(report.failed),
        )
        return report

    def _record_failure(self, report: CycleReport, group: MetricGroup, reason: str) -> None:
        logger.warning("Error collecting %s metrics: %s", group.name, reason)
        report.failed[group.name] = reason
        if self.instruments is not None:
            self.instruments.group_failures.labels(group=group.name).inc()
