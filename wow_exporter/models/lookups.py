"""
Static code → label tables for AzerothCore data.

Tables are read-only after import. Codes missing from a table render as
``Unknown_<code>``, except race → faction, where unmapped races have no
faction at all and callers drop the row.
"""
from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

ALLIANCE = "Alliance"
HORDE = "Horde"

RACE_TO_FACTION: Mapping[int, str] = MappingProxyType({
    1: ALLIANCE,    # Human
    2: HORDE,       # Orc
    3: ALLIANCE,    # Dwarf
    4: ALLIANCE,    # Night Elf
    5: HORDE,       # Undead
    6: HORDE,       # Tauren
    7: ALLIANCE,    # Gnome
    8: HORDE,       # Troll
    9: HORDE,       # Goblin
    10: HORDE,      # Blood Elf
    11: ALLIANCE,   # Draenei
    22: HORDE,      # Worgen
    24: ALLIANCE,   # Pandaren (Neutral)
    25: ALLIANCE,   # Pandaren (Alliance)
    26: HORDE,      # Pandaren (Horde)
})

CLASS_NAMES: Mapping[int, str] = MappingProxyType({
    1: "Warrior",
    2: "Paladin",
    3: "Hunter",
    4: "Rogue",
    5: "Priest",
    6: "Death Knight",
    7: "Shaman",
    8: "Mage",
    9: "Warlock",
    10: "Monk",
    11: "Druid",
    12: "Demon Hunter",
})

DIFFICULTY_NAMES: Mapping[int, str] = MappingProxyType({
    0: "Normal",
    1: "Heroic",
    2: "10_Player",
    3: "25_Player",
    4: "10_Player_Heroic",
    5: "25_Player_Heroic",
})

LFG_STATE_NAMES: Mapping[int, str] = MappingProxyType({
    0: "None",
    1: "RoleCheck",
    2: "Queued",
    3: "Proposal",
    4: "Boot",
    5: "Dungeon",
    6: "FinishedDungeon",
})

IP_ACTION_TYPE_NAMES: Mapping[int, str] = MappingProxyType({
    0: "Login",
    1: "Failed_Login",
    2: "Logout",
    3: "Character_Create",
    4: "Character_Delete",
    5: "Character_Login",
    6: "Character_Logout",
    7: "Password_Change",
    8: "Account_Create",
    9: "Account_Delete",
})

LAG_TYPE_NAMES: Mapping[int, str] = MappingProxyType({
    0: "World",
    1: "Instance",
    2: "Battleground",
    3: "Arena",
    4: "Raid",
})

BATTLEGROUND_TYPE_NAMES: Mapping[int, str] = MappingProxyType({
    1: "Alterac Valley",
    2: "Warsong Gulch",
    3: "Arathi Basin",
    4: "Eye of the Storm",
    5: "Strand of the Ancients",
    6: "Isle of Conquest",
    7: "Twin Peaks",
    8: "Battle for Gilneas",
    9: "Temple of Kotmogu",
    10: "Silvershard Mines",
    11: "Deepwind Gorge",
})

DESERTION_TYPE_NAMES: Mapping[int, str] = MappingProxyType({
    0: "Leave",
    1: "Offline",
    2: "Desert",
    3: "Finish",
})

# auctionhouse.houseid
AUCTION_HOUSE_NAMES: Mapping[int, str] = MappingProxyType({
    1: ALLIANCE,
    2: HORDE,
    7: "Neutral",
})

# pvpstats_battlegrounds.winner_faction
WINNER_FACTION_NAMES: Mapping[int, str] = MappingProxyType({
    0: ALLIANCE,
    1: HORDE,
})


def label_for(table: Mapping[int, str], code: int) -> str:
    """Label for ``code``, or the ``Unknown_<code>`` placeholder."""
    name = table.get(code)
    if name is None:
        return f"Unknown_{code}"
    return name


def faction_for_race(race: int) -> str | None:
    return RACE_TO_FACTION.get(race)
