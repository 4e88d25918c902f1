"""Tests for station-code and friendly-name formatting."""

from __future__ import annotations

import pytest

from vscsdeck.client.labels import InitialsLabelFormatter, StationLabelFormatter, words_from_name

ALIASES = {"MUN": {"code": "MUN", "label": "Mungo"}, "SY": {"label": "Sydney"}}


class TestWordsFromName:
    def test_splits_separators(self):
        assert words_from_name("ml_mun-ctr  x") == ["ML", "MUN", "CTR", "X"]

    def test_empty(self):
        assert words_from_name("") == []


class TestStationLabelFormatter:
    @pytest.mark.parametrize(
        "name, code, friendly",
        [
            ("ML_MUN_CTR", "MUN", "Mungo"),
            ("ML_ELW_CTR", "ELW", "Elw"),
            ("SY_GND", "SY SMC", "Sydney Gr"),
            ("BN_GND", "BN SMC", "Bn Gr"),
            ("Sydney Approach North", "SAN", "Sydney Approach North"),
            ("ML_TWR", "ML TWR", "Ml"),
            ("ML_DEL", "ML DEL", "Ml Del"),
            ("TOWER", "TOW", "Tower"),
            ("", "", ""),
        ],
    )
    def test_label_for(self, name, code, friendly):
        assert StationLabelFormatter(ALIASES).label_for(name) == (code, friendly)

    def test_alias_keys_case_insensitive(self):
        fmt = StationLabelFormatter({"mun": {"code": "MNG"}})
        assert fmt.label_for("ML_MUN_CTR")[0] == "MNG"

    def test_no_aliases(self):
        assert StationLabelFormatter().label_for("ML_MUN_CTR") == ("MUN", "Mun")


class TestInitialsLabelFormatter:
    @pytest.mark.parametrize(
        "name, code, friendly",
        [
            ("Sydney Approach North", "SAN", "Sydney Approach North"),
            ("GND", "GND", "Gnd"),
            ("SY_GND", "SG", "Sy Gnd"),
            ("", "", ""),
        ],
    )
    def test_label_for(self, name, code, friendly):
        assert InitialsLabelFormatter().label_for(name) == (code, friendly)
