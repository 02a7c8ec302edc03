"""Shared fixtures for draft board tests."""

import pytest

from draftboard.player import Player
from draftboard.draft.draft_state import create_initial_draft_state
from draftboard.draft.draft_state_manager import DraftStateManager


SLEEPER_HEADER = 'Player,Team,Bye,POS,Rank,ADP'

FANTASYPROS_HEADER = (
    'Rank,Player,Team,Bye,POS,ESPN,Sleeper,CBS,NFL,RTSports,Fantrax,AVG'
)

ROTOVIZ_HEADER = 'id,Rank,Player,Pos,Team,PosRank,AvgRank,AvgTier'


def make_player(name, position='RB', source='Sleeper', index=0, adp=None, tier=1, team='ATL'):
    return Player(
        id=f"{source}-{index}",
        name=name,
        team=team,
        bye='5',
        position=position,
        adp=float(adp if adp is not None else index + 1),
        tier=tier,
        source=source,
    )


def sleeper_rows(count, positions=('QB', 'RB', 'WR', 'TE')):
    """Data rows in the Sleeper/ESPN layout with numbered positions."""
    rows = []
    for i in range(count):
        pos = positions[i % len(positions)]
        rows.append(f'"Player {i + 1}","T{i % 32}","{i % 14 + 1}","{pos}{i // 4 + 1}","{i + 1}","{i + 1}.5"')
    return rows


@pytest.fixture
def sleeper_text():
    """Header + 15 valid Sleeper rows."""
    return '\n'.join([SLEEPER_HEADER] + sleeper_rows(15))


@pytest.fixture
def state():
    return create_initial_draft_state(num_teams=12)


@pytest.fixture
def manager(state):
    return DraftStateManager(state)


@pytest.fixture
def bijan():
    return make_player('Bijan Robinson', 'RB', index=0)


@pytest.fixture
def chase():
    return make_player("Ja'Marr Chase", 'WR', index=1)
