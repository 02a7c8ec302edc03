"""Tests for the board session orchestrator."""

import json

import pytest

from draftboard.draft.board_layout import CellStatus
from draftboard.draft.board_session import BoardSession
from draftboard.draft.team_name_store import TeamNameStore
from draftboard.feed_fetcher import FeedFetcher

from conftest import SLEEPER_HEADER, sleeper_rows


@pytest.fixture
def feed_dir(tmp_path):
    feeds = tmp_path / 'feeds'
    feeds.mkdir()
    text = '\n'.join([SLEEPER_HEADER] + sleeper_rows(10))
    (feeds / 'sleeper.csv').write_text(text, encoding='utf-8')
    (feeds / 'espn.csv').write_text(text, encoding='utf-8')
    return feeds


@pytest.fixture
def session(tmp_path, feed_dir):
    board = BoardSession(
        num_teams=4,
        rows=3,
        team_name_store=TeamNameStore(tmp_path / 'team_names.json'),
    )
    fetcher = FeedFetcher(
        data_dir=str(feed_dir),
        feed_locations={'Sleeper': 'sleeper.csv', 'ESPN': 'espn.csv', 'RotoViz': 'missing.csv'},
        show_progress=False,
    )
    board.load_feeds(fetcher)
    return board


def test_feeds_loaded(session):
    assert session.source_counts() == {'Sleeper': 10, 'ESPN': 10, 'RotoViz': 0}
    assert session.current_source == 'ESPN'
    assert session.cols == 4


def test_board_shape(session):
    cells = session.board('Sleeper')

    assert len(cells) == 3
    assert all(len(row) == 4 for row in cells)
    assert cells[1][0].player.id == 'Sleeper-7'
    assert cells[2][2].status == CellStatus.EMPTY


def test_empty_source(session):
    assert session.board('RotoViz') == []
    assert session.empty_message('RotoViz') == 'No data available for RotoViz'


def test_unknown_source(session):
    with pytest.raises(KeyError):
        session.select_source('Yahoo')
    with pytest.raises(KeyError):
        session.board('Yahoo')


def test_click_toggles_for_current_team(session):
    result = session.click('ESPN-0')
    assert result.action == 'drafted'
    assert result.owner == 'team1'
    assert result.player.name == 'Player 1'
    assert session.board()[0][0].status == CellStatus.DRAFTED_BY_CURRENT

    result = session.click('ESPN-0')
    assert result.action == 'undrafted'
    assert result.owner is None
    assert session.board()[0][0].status == CellStatus.UNDRAFTED


def test_click_blocked_across_sources(session):
    session.click('ESPN-0')
    session.select_team('team2')
    session.select_source('Sleeper')

    # same name in a different feed
    result = session.click('Sleeper-0')
    assert result.action == 'ignored'
    assert result.owner == 'team1'
    assert session.board()[0][0].status == CellStatus.DRAFTED_BY_OTHER
    assert session.manager.owner_of('Player 1') == 'team1'


def test_click_unknown_player(session):
    with pytest.raises(KeyError):
        session.click('ESPN-99')


def test_rename_persists_names(session, tmp_path):
    session.select_team('team3')

    assert session.rename_current_team('Wolves')
    assert not session.rename_current_team('   ')

    stored = json.loads((tmp_path / 'team_names.json').read_text())
    assert stored == ['Team 1', 'Team 2', 'Wolves', 'Team 4']


def test_stored_names_applied_at_startup(tmp_path):
    store = TeamNameStore(tmp_path / 'team_names.json')
    store.save(['A', 'B', 'C', 'D'])

    assert BoardSession(num_teams=4, team_name_store=store).state.team_names == ['A', 'B', 'C', 'D']
    assert BoardSession(num_teams=5, team_name_store=store).state.team_names[0] == 'Team 1'


def test_roster_lines(session):
    session.click('ESPN-0')  # Player 1, QB
    session.click('ESPN-1')  # Player 2, RB

    assert session.roster_lines() == [
        'QB: Player 1',
        'RB: Player 2',
        'WR: —',
        'TE: —',
        'FLEX: —',
    ]


def test_mock_source(session):
    session.add_mock_source('Underdog', count=20)
    session.select_source('Underdog')

    assert session.source_counts()['Underdog'] == 20
    assert session.board()[0][0].player.id == 'Underdog-0'


def test_checkpoint_autosave_and_reload(tmp_path, feed_dir):
    checkpoint = tmp_path / 'draft.json'
    fetcher = FeedFetcher(
        data_dir=str(feed_dir),
        feed_locations={'ESPN': 'espn.csv'},
        show_progress=False,
    )

    first = BoardSession(num_teams=4, checkpoint_path=checkpoint)
    first.load_feeds(fetcher)
    first.click('ESPN-2')
    assert checkpoint.exists()

    second = BoardSession(num_teams=4, checkpoint_path=checkpoint)
    assert second.manager.owner_of('Player 3') == 'team1'

    with pytest.raises(ValueError):
        BoardSession(num_teams=6, checkpoint_path=checkpoint)


def test_available_only_board(session):
    session.click('ESPN-0')

    cells = session.board(available_only=True)

    assert cells[0][0].player.id == 'ESPN-1'
    assert all(
        cell.player is None or cell.player.id != 'ESPN-0'
        for row in cells for cell in row
    )
    # the full board still shows the pick
    assert session.board()[0][0].status == CellStatus.DRAFTED_BY_CURRENT


def test_available_only_board_fully_drafted():
    board = BoardSession(num_teams=4, rows=3)
    board.add_mock_source('ESPN', count=2)
    board.select_source('ESPN')
    board.click('ESPN-0')
    board.click('ESPN-1')

    assert board.board(available_only=True) == []


def test_click_kept_when_checkpoint_save_fails(tmp_path, feed_dir):
    blocker = tmp_path / 'blocker'
    blocker.write_text('not a directory', encoding='utf-8')
    fetcher = FeedFetcher(
        data_dir=str(feed_dir),
        feed_locations={'ESPN': 'espn.csv'},
        show_progress=False,
    )

    board = BoardSession(num_teams=4, checkpoint_path=blocker / 'draft.json')
    board.load_feeds(fetcher)
    result = board.click('ESPN-0')

    assert result.action == 'drafted'
    assert board.manager.owner_of('Player 1') == 'team1'
    assert not (blocker / 'draft.json').exists()

    # a later click still applies
    assert board.click('ESPN-0').action == 'undrafted'
    assert board.manager.owner_of('Player 1') is None


def test_rename_kept_when_name_save_fails(tmp_path):
    blocker = tmp_path / 'blocker'
    blocker.write_text('not a directory', encoding='utf-8')
    board = BoardSession(num_teams=4, team_name_store=TeamNameStore(blocker / 'team_names.json'))

    assert board.rename_current_team('Wolves')
    assert board.state.team_names[0] == 'Wolves'
