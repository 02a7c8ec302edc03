"""Tests for ADP feed parsing and normalization."""

import pytest

from draftboard.feed_parser import (
    FEED_FORMATS,
    normalize_position,
    parse_feed,
    parse_row,
    tier_for_index,
)

from conftest import FANTASYPROS_HEADER, ROTOVIZ_HEADER, SLEEPER_HEADER, sleeper_rows


class TestNormalizePosition:

    @pytest.mark.parametrize('raw, expected', [
        ('RB2', 'RB'),
        ('WR12', 'WR'),
        ('QB', 'QB'),
        (' te1 ', 'TE'),
        ('DST3', 'DST'),
        ('', ''),
    ])
    def test_strips_slot_digits(self, raw, expected):
        assert normalize_position(raw) == expected

    @pytest.mark.parametrize('pos', ['RB', 'WR1', 'K', 'te'])
    def test_idempotent(self, pos):
        once = normalize_position(pos)
        assert normalize_position(once) == once


class TestTiers:

    def test_index_boundaries(self):
        assert tier_for_index(0) == 1
        assert tier_for_index(14) == 1
        assert tier_for_index(15) == 2
        assert tier_for_index(29) == 2
        assert tier_for_index(30) == 3


class TestParseFeed:

    def test_fifteen_valid_rows(self, sleeper_text):
        players = parse_feed(sleeper_text, FEED_FORMATS['Sleeper'])

        assert len(players) == 15
        assert [p.id for p in players] == [f"Sleeper-{i}" for i in range(15)]
        assert all(p.tier == 1 for p in players)
        assert {p.position for p in players} == {'QB', 'RB', 'WR', 'TE'}

    def test_fields_extracted(self):
        text = '\n'.join([SLEEPER_HEADER, '"Bijan Robinson","ATL","5","RB1","1","1.8"'])
        player = parse_feed(text, FEED_FORMATS['Sleeper'])[0]

        assert player.name == 'Bijan Robinson'
        assert player.team == 'ATL'
        assert player.bye == '5'
        assert player.position == 'RB'
        assert player.adp == pytest.approx(1.8)
        assert player.source == 'Sleeper'

    def test_rejected_rows_do_not_abort_batch(self):
        rows = sleeper_rows(6)
        rows[1] = '"","KC","10","QB","2","2.0"'                # no name
        rows[2] = '"Some Kicker","KC","10","K1","3","3.0"'     # kicker
        rows[3] = '"Some Defense","KC","10","DST","4","4.0"'   # defense
        rows[4] = '"Bad Adp","KC","10","WR","5","n/a"'         # unparseable ADP
        text = '\n'.join([SLEEPER_HEADER] + rows + [''])

        players = parse_feed(text, FEED_FORMATS['Sleeper'])

        # 6 rows + trailing blank line, 5 rejected
        assert [p.id for p in players] == ['Sleeper-0', 'Sleeper-5']

    def test_short_rows_dropped(self):
        text = '\n'.join([SLEEPER_HEADER, 'Only,Three,Fields', *sleeper_rows(1)])
        players = parse_feed(text, FEED_FORMATS['Sleeper'])

        assert len(players) == 1
        # row index counts the dropped line
        assert players[0].id == 'Sleeper-1'

    def test_missing_position_rejected(self):
        assert parse_row('"Name","KC","10","","1","1.0"', 0, FEED_FORMATS['ESPN']) is None

    def test_windows_line_endings(self):
        text = SLEEPER_HEADER + '\r\n' + '"Josh Allen","BUF","7","QB1","1","20.1"\r\n'
        players = parse_feed(text, FEED_FORMATS['ESPN'])

        assert len(players) == 1
        assert players[0].adp == pytest.approx(20.1)
        assert players[0].id == 'ESPN-0'

    def test_header_only(self):
        assert parse_feed(SLEEPER_HEADER, FEED_FORMATS['Sleeper']) == []
        assert parse_feed('', FEED_FORMATS['Sleeper']) == []

    def test_index_tiers_across_rounds(self):
        text = '\n'.join([SLEEPER_HEADER] + sleeper_rows(31))
        tiers = [p.tier for p in parse_feed(text, FEED_FORMATS['ESPNTop300'])]

        assert tiers[:15] == [1] * 15
        assert tiers[15:30] == [2] * 15
        assert tiers[30] == 3


class TestFantasyPros:

    def row(self, rank, name, pos, avg):
        return f'"{rank}","{name}","CIN","10","{pos}","1","2","1","3","2","1","{avg}"'

    def test_tier_from_rank_column(self):
        text = '\n'.join([
            FANTASYPROS_HEADER,
            self.row(15, "Ja'Marr Chase", 'WR1', '1.2'),
            self.row(16, 'Bijan Robinson', 'RB1', '2.0'),
        ])
        players = parse_feed(text, FEED_FORMATS['FantasyPros'])

        assert [p.tier for p in players] == [1, 2]
        assert players[0].adp == pytest.approx(1.2)
        assert players[0].id == 'FantasyPros-0'

    def test_bad_rank_falls_back_to_row(self):
        rows = [self.row(i + 1, f'P{i}', 'WR', i + 1) for i in range(16)]
        rows[15] = self.row('', 'Unranked', 'TE', '40')
        text = '\n'.join([FANTASYPROS_HEADER] + rows)

        players = parse_feed(text, FEED_FORMATS['FantasyPros'])

        # row index 15 -> rank 16 -> tier 2
        assert players[-1].name == 'Unranked'
        assert players[-1].tier == 2

    def test_eleven_fields_rejected(self):
        line = '"1","Name","CIN","10","WR","1","2","1","3","2","1"'
        assert parse_row(line, 0, FEED_FORMATS['FantasyPros']) is None


class TestRotoViz:

    def test_explicit_tier_and_no_bye(self):
        text = '\n'.join([
            ROTOVIZ_HEADER,
            '"9","1","Justin Jefferson","WR","MIN","WR1","1.4","3"',
        ])
        player = parse_feed(text, FEED_FORMATS['RotoViz'])[0]

        assert player.name == 'Justin Jefferson'
        assert player.team == 'MIN'
        assert player.bye == ''
        assert player.adp == pytest.approx(1.4)
        assert player.tier == 3

    def test_missing_tier_uses_row_index(self):
        text = '\n'.join([
            ROTOVIZ_HEADER,
            '"9","1","Justin Jefferson","WR","MIN","WR1","1.4",""',
        ])
        assert parse_feed(text, FEED_FORMATS['RotoViz'])[0].tier == 1

    def test_position_normalized(self):
        text = '\n'.join([ROTOVIZ_HEADER, '"1","2","Breece Hall","RB2","NYJ","RB2","8.0","1"'])
        assert parse_feed(text, FEED_FORMATS['RotoViz'])[0].position == 'RB'
