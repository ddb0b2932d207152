"""Gauge definitions exported by the WoW exporter."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MetricDefinition:
    """Name, help text and label names of one gauge. No labels means a scalar gauge."""

    name: str
    documentation: str
    labelnames: tuple[str, ...] = ()

    @property
    def is_vector(self) -> bool:
        return bool(self.labelnames)


def _gauge(name: str, documentation: str, labelnames: tuple[str, ...] = ()) -> MetricDefinition:
    return MetricDefinition(name, documentation, tuple(labelnames))


# ── Players ──────────────────────────────────────────────────────────────────

PLAYERS_ONLINE = _gauge("wow_players_online", "Number of players currently online", ("faction",))
PLAYERS_TOTAL = _gauge("wow_players_total", "Total number of players", ("faction",))
PLAYERS_BY_LEVEL = _gauge("wow_players_by_level", "Number of players by level", ("level", "faction"))
PLAYERS_BY_CLASS = _gauge("wow_players_by_class", "Number of players by class", ("class", "faction"))
ONLINE_PLAYERS_BY_LEVEL = _gauge(
    "wow_online_players_by_level",
    "Level of each online character, labelled with its account name",
    ("character", "account"),
)

# ── Mail ─────────────────────────────────────────────────────────────────────

MAIL_TOTAL = _gauge("wow_mail_total", "Total number of mail messages")
MAIL_BY_FACTION = _gauge("wow_mail_by_faction", "Number of mail messages by faction", ("faction",))
MAIL_WITH_ITEMS = _gauge("wow_mail_with_items", "Number of mail messages with items")
UNREAD_MAIL_COUNT = _gauge("wow_unread_mail_count", "Number of unread mail messages")

# ── Accounts ─────────────────────────────────────────────────────────────────

ACCOUNTS_TOTAL = _gauge("wow_accounts_total", "Total number of accounts")
ACCOUNTS_ONLINE = _gauge("wow_accounts_online", "Number of accounts currently online")
ACCOUNTS_BANNED = _gauge("wow_accounts_banned", "Number of banned accounts")
GM_ACCOUNT_COUNT = _gauge("wow_gm_account_count", "Number of accounts with GM level")

# ── Server ───────────────────────────────────────────────────────────────────

SERVER_UPTIME = _gauge("wow_server_uptime_seconds", "Server uptime in seconds")
SERVER_MAX_PLAYERS = _gauge("wow_server_max_players", "Maximum number of players recorded")
LAST_SERVER_RESTART = _gauge(
    "wow_server_last_restart_timestamp", "Timestamp of the last server restart (unix time)"
)

# ── Economy / guilds / characters ────────────────────────────────────────────

AUCTION_COUNT = _gauge("wow_auction_count", "Number of active auctions by house (faction)", ("house",))
GUILD_COUNT = _gauge("wow_guild_count", "Number of guilds")
MAX_LEVEL_CHAR_COUNT = _gauge(
    "wow_max_level_characters", "Number of max-level characters by faction", ("faction",)
)
BANNED_CHAR_COUNT = _gauge("wow_banned_characters", "Number of banned characters")

# ── Chat and logs ────────────────────────────────────────────────────────────

CHANNEL_COUNT = _gauge("wow_channel_count", "Number of chat channels")
CHANNEL_BANS = _gauge("wow_channel_bans", "Number of channel bans")
LOG_COUNT_BY_TYPE = _gauge("wow_log_count", "Number of log entries by type", ("type",))
GUILD_EVENT_COUNT = _gauge("wow_guild_events", "Number of guild events")
MONEY_LOG_COUNT = _gauge("wow_money_logs", "Number of money transaction logs")
ENCOUNTER_LOG_COUNT = _gauge("wow_encounter_logs", "Number of encounter logs")
ARENA_LOG_COUNT = _gauge("wow_arena_logs", "Number of arena fight logs")
IP_ACTION_LOG_COUNT = _gauge("wow_ip_action_logs", "Number of IP action logs")

# ── Instances and LFG ────────────────────────────────────────────────────────

ACTIVE_INSTANCE_COUNT = _gauge("wow_active_instances", "Number of active instances")
INSTANCES_BY_DIFFICULTY = _gauge(
    "wow_instances_by_difficulty", "Number of instances by difficulty", ("difficulty",)
)
COMPLETED_ENCOUNTERS = _gauge(
    "wow_completed_encounters", "Number of completed encounters by instance", ("instance_id",)
)
INSTANCE_RESETS = _gauge(
    "wow_instance_resets", "Instance reset times by map and difficulty", ("map_id", "difficulty")
)
CHARACTERS_IN_INSTANCES = _gauge("wow_characters_in_instances", "Number of characters currently in instances")
LFG_DATA_COUNT = _gauge("wow_lfg_data", "Number of LFG entries by state", ("state",))
LAG_REPORTS_COUNT = _gauge("wow_lag_reports", "Number of lag reports")
INSTANCE_SAVES_COUNT = _gauge("wow_instance_saves", "Number of saved instance states")

# ── Network ──────────────────────────────────────────────────────────────────

PLAYER_LATENCY_STATS = _gauge("wow_player_latency", "Player latency statistics", ("stat",))
IP_BANNED_COUNT = _gauge("wow_ip_banned_count", "Number of banned IP addresses")
IP_ACTION_LOGS_BY_TYPE = _gauge("wow_ip_action_logs_by_type", "Number of IP action logs by type", ("type",))
LAG_REPORTS_BY_TYPE = _gauge("wow_lag_reports_by_type", "Number of lag reports by type", ("lag_type",))
AVERAGE_LATENCY = _gauge("wow_average_latency_ms", "Average player latency in milliseconds")
HIGH_LATENCY_PLAYERS = _gauge("wow_high_latency_players", "Number of players with high latency (>200ms)")
NETWORK_ACTIVITY_BY_IP = _gauge(
    "wow_network_activity_by_ip", "Network activity by IP address (top 10)", ("ip",)
)

# ── Battlegrounds ────────────────────────────────────────────────────────────

BATTLEGROUND_DESERTERS = _gauge("wow_battleground_deserters", "Number of battleground deserters")
BATTLEGROUND_DESERTERS_BY_TYPE = _gauge(
    "wow_battleground_deserters_by_type", "Number of battleground deserters by type", ("desertion_type",)
)
RANDOM_BATTLEGROUND_QUEUE = _gauge(
    "wow_random_battleground_queue", "Number of players in random battleground queue"
)
BATTLEGROUND_STATS = _gauge("wow_battleground_stats", "Battleground statistics", ("stat",))
BATTLEGROUNDS_BY_TYPE = _gauge(
    "wow_battlegrounds_by_type", "Number of battlegrounds by type", ("battleground_type",)
)
BATTLEGROUNDS_BY_BRACKET = _gauge(
    "wow_battlegrounds_by_bracket", "Number of battlegrounds by bracket", ("bracket",)
)
BATTLEGROUND_WINS_BY_FACTION = _gauge(
    "wow_battleground_wins_by_faction", "Number of battleground wins by faction", ("faction",)
)
BATTLEGROUND_PLAYER_STATS = _gauge(
    "wow_battleground_player_stats", "Battleground player statistics", ("stat",)
)
BATTLEGROUND_TEMPLATES = _gauge(
    "wow_battleground_templates", "Battleground template information", ("template_id", "script_name")
)
BATTLEGROUND_TEMPLATE_DETAILS = _gauge(
    "wow_battleground_template_details",
    "Detailed battleground template information",
    ("template_id", "name", "min_level", "max_level", "min_players", "max_players"),
)
RECENT_BATTLEGROUNDS = _gauge("wow_recent_battlegrounds", "Recent battleground activity", ("time_period",))


ALL_DEFINITIONS: tuple[MetricDefinition, ...] = (
    # players
    PLAYERS_ONLINE,
    PLAYERS_TOTAL,
    PLAYERS_BY_LEVEL,
    PLAYERS_BY_CLASS,
    ONLINE_PLAYERS_BY_LEVEL,
    # mail
    MAIL_TOTAL,
    MAIL_BY_FACTION,
    MAIL_WITH_ITEMS,
    UNREAD_MAIL_COUNT,
    # accounts
    ACCOUNTS_TOTAL,
    ACCOUNTS_ONLINE,
    ACCOUNTS_BANNED,
    GM_ACCOUNT_COUNT,
    # server
    SERVER_UPTIME,
    SERVER_MAX_PLAYERS,
    LAST_SERVER_RESTART,
    # economy and characters
    AUCTION_COUNT,
    GUILD_COUNT,
    MAX_LEVEL_CHAR_COUNT,
    BANNED_CHAR_COUNT,
    # chat and logs
    CHANNEL_COUNT,
    CHANNEL_BANS,
    LOG_COUNT_BY_TYPE,
    GUILD_EVENT_COUNT,
    MONEY_LOG_COUNT,
    ENCOUNTER_LOG_COUNT,
    ARENA_LOG_COUNT,
    IP_ACTION_LOG_COUNT,
    # instances
    ACTIVE_INSTANCE_COUNT,
    INSTANCES_BY_DIFFICULTY,
    COMPLETED_ENCOUNTERS,
    INSTANCE_RESETS,
    CHARACTERS_IN_INSTANCES,
    LFG_DATA_COUNT,
    LAG_REPORTS_COUNT,
    INSTANCE_SAVES_COUNT,
    # network
    PLAYER_LATENCY_STATS,
    IP_BANNED_COUNT,
    IP_ACTION_LOGS_BY_TYPE,
    LAG_REPORTS_BY_TYPE,
    AVERAGE_LATENCY,
    HIGH_LATENCY_PLAYERS,
    NETWORK_ACTIVITY_BY_IP,
    # battlegrounds
    BATTLEGROUND_DESERTERS,
    BATTLEGROUND_DESERTERS_BY_TYPE,
    RANDOM_BATTLEGROUND_QUEUE,
    BATTLEGROUND_STATS,
    BATTLEGROUNDS_BY_TYPE,
    BATTLEGROUNDS_BY_BRACKET,
    BATTLEGROUND_WINS_BY_FACTION,
    BATTLEGROUND_PLAYER_STATS,
    BATTLEGROUND_TEMPLATES,
    BATTLEGROUND_TEMPLATE_DETAILS,
    RECENT_BATTLEGROUNDS,
)
