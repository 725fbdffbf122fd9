"""Tests for CSV export and import."""

import io
import logging
from pathlib import Path

import pytest
from mtg_collection_tracker import csv_codec
from mtg_collection_tracker.collection import CardCollection
from mtg_collection_tracker.exceptions import CollectionIOError, MalformedRowError
from mtg_collection_tracker.models import Card

HEADER = "Name,Rarity,Condition,Value,Edition,CardType,Color,ManaCost,Subtype,Foil"


def write_lines(path: Path, *lines: str) -> Path:
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


class TestRowFormat:
    """Test suite for the line format."""

    def test_header(self) -> None:
        assert csv_codec.HEADER == HEADER

    def test_format_row(self, bolt: Card) -> None:
        assert csv_codec.format_row(bolt) == "Bolt,Common,Excellent,5.50,Unlimited,Instant,Red,1,Instant,No"

    def test_value_has_two_decimals(self, bolt: Card) -> None:
        bolt.value = 3
        bolt.is_foil = True
        row = csv_codec.format_row(bolt).split(",")
        assert row[3] == "3.00"
        assert row[9] == "Yes"

    def test_read_rows_requires_ten_fields(self) -> None:
        source = io.StringIO(HEADER + "\r\na,b,c\r\na,b,c,d,e,f,g,h,i,j\r\n\r\n", newline="")
        rows = list(csv_codec.read_rows(source))
        assert rows[0] == (2, None)
        assert rows[1] == (3, list("abcdefghij"))
        assert rows[2] == (4, None)

    def test_read_rows_keeps_quotes_as_text(self) -> None:
        source = io.StringIO(HEADER + "\n\"Bolt,Common,Excellent,5.50,Unlimited,Instant,Red,1,Instant,No\n")
        [(line_number, parts)] = list(csv_codec.read_rows(source))
        assert line_number == 2
        assert parts[0] == '"Bolt'
        assert parts[9] == "No"

    @pytest.mark.parametrize("token,expected", [("Yes", True), ("YES", True), ("yes", True), ("No", False), ("Y", False), ("true", False), ("", False)])
    def test_parse_foil(self, token: str, expected: bool) -> None:
        assert csv_codec.parse_foil(token) is expected

    def test_parse_row_bad_value(self) -> None:
        parts = "Bolt,Common,Excellent,cheap,Unlimited,Instant,Red,1,Instant,No".split(",")
        with pytest.raises(MalformedRowError) as exc_info:
            csv_codec.parse_row(parts, 4)
        assert exc_info.value.name == "Bolt"
        assert exc_info.value.line_number == 4

    def test_parse_row_bad_mana_cost(self) -> None:
        parts = "Bolt,Common,Excellent,1.00,Unlimited,Instant,Red,one,Instant,No".split(",")
        with pytest.raises(MalformedRowError, match="mana cost"):
            csv_codec.parse_row(parts)

    def test_parse_row_negative_value(self) -> None:
        parts = "Bolt,Common,Excellent,-1.00,Unlimited,Instant,Red,1,Instant,No".split(",")
        with pytest.raises(MalformedRowError, match="negative"):
            csv_codec.parse_row(parts)

    @pytest.mark.parametrize("token", ["nan", "NaN", "inf", "-inf", "Infinity"])
    def test_parse_row_non_finite_value(self, token: str) -> None:
        parts = f"Bolt,Common,Excellent,{token},Unlimited,Instant,Red,1,Instant,No".split(",")
        with pytest.raises(MalformedRowError) as exc_info:
            csv_codec.parse_row(parts, 2)
        assert exc_info.value.name == "Bolt"

    def test_unsafe_fields(self, bolt: Card) -> None:
        assert csv_codec.unsafe_fields(bolt) == []
        bolt.name = "Nicol Bolas, Dragon-God"
        assert csv_codec.unsafe_fields(bolt) == ["name"]


class TestExport:
    """Test suite for exporting a collection."""

    def test_export_writes_header_and_rows(self, collection: CardCollection, tmp_path: Path) -> None:
        path = tmp_path / "out.csv"
        assert collection.export_csv(path) == 3
        lines = path.read_text(encoding="utf-8").splitlines()
        assert lines[0] == HEADER
        assert lines[1] == "Bolt,Common,Excellent,5.50,Unlimited,Instant,Red,1,Instant,No"
        assert lines[2] == "Serra Angel,Uncommon,Near Mint,2.25,Alpha,Creature,White,5,Angel,Yes"
        assert len(lines) == 4

    def test_export_empty_collection_writes_header_only(self, empty_collection: CardCollection, tmp_path: Path) -> None:
        path = tmp_path / "empty.csv"
        assert empty_collection.export_csv(path) == 0
        assert path.read_text(encoding="utf-8") == HEADER + "\n"

    def test_export_warns_about_commas(self, tmp_path: Path, caplog) -> None:
        collection = CardCollection.with_samples()
        with caplog.at_level(logging.WARNING, logger="mtg_collection_tracker.collection"):
            collection.export_csv(tmp_path / "samples.csv")
        assert "Nicol Bolas, Dragon-God" in caplog.text

    def test_export_to_missing_directory(self, collection: CardCollection, tmp_path: Path) -> None:
        with pytest.raises(CollectionIOError) as exc_info:
            collection.export_csv(tmp_path / "missing" / "out.csv")
        assert isinstance(exc_info.value, OSError)


class TestImport:
    """Test suite for importing a collection."""

    def test_round_trip(self, collection: CardCollection, tmp_path: Path) -> None:
        path = tmp_path / "round.csv"
        collection.export_csv(path)
        restored = CardCollection.from_csv(path)
        assert [c.to_dict() for c in restored] == [c.to_dict() for c in collection]

    def test_import_appends(self, collection: CardCollection, tmp_path: Path) -> None:
        path = write_lines(
            tmp_path / "more.csv",
            HEADER,
            "Counterspell,Uncommon,Mint,1.25,Alpha,Instant,Blue,2,Instant,no",
        )
        assert collection.import_csv(path) == 1
        assert len(collection) == 4
        assert collection.get(3).name == "Counterspell"

    def test_header_line_is_not_checked(self, empty_collection: CardCollection, tmp_path: Path) -> None:
        path = write_lines(
            tmp_path / "odd.csv",
            "Bolt,Common,Excellent,5.50,Unlimited,Instant,Red,1,Instant,No",
            "Ancestral Recall,Rare,Good,400.00,Alpha,Instant,Blue,1,Instant,No",
        )
        assert empty_collection.import_csv(path) == 1
        assert empty_collection.get(0).name == "Ancestral Recall"

    def test_mixed_file_skips_bad_rows(self, empty_collection: CardCollection, tmp_path: Path, caplog) -> None:
        path = write_lines(
            tmp_path / "mixed.csv",
            HEADER,
            "Bolt,Common,Excellent,5.50,Unlimited,Instant,Red,1,Instant,No",
            "Serra Angel,Uncommon,Near Mint,2.25,Alpha,Creature,White,5,Angel,Yes",
            "Short Row,Common,Mint,1.00,Alpha,Instant,Red,1,No",
            "Bad Rarity,Legendary,Mint,1.00,Alpha,Instant,Red,1,Instant,No",
            "Shivan Dragon,Rare,Good,120.00,Beta,Creature,Red,6,Dragon,No",
        )
        with caplog.at_level(logging.DEBUG, logger="mtg_collection_tracker.collection"):
            count = empty_collection.import_csv(path)

        assert count == 3
        assert [c.name for c in empty_collection] == ["Bolt", "Serra Angel", "Shivan Dragon"]
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "Bad Rarity" in warnings[0].getMessage()

    def test_import_normalizes_casing(self, empty_collection: CardCollection, tmp_path: Path) -> None:
        path = write_lines(
            tmp_path / "case.csv",
            HEADER,
            "Bolt,common,near mint,5.5,Unlimited,Instant,RED,1,Instant,YES",
        )
        empty_collection.import_csv(path)
        card = empty_collection.get(0)
        assert (card.rarity, card.condition, card.color, card.is_foil) == ("Common", "Near Mint", "Red", True)
        assert empty_collection.statistics().count_for("Common") == 1

    def test_unknown_foil_token_means_not_foil(self, empty_collection: CardCollection, tmp_path: Path) -> None:
        path = write_lines(
            tmp_path / "foil.csv",
            HEADER,
            "Bolt,Common,Excellent,5.50,Unlimited,Instant,Red,1,Instant,maybe",
        )
        assert empty_collection.import_csv(path) == 1
        assert empty_collection.get(0).is_foil is False

    def test_blank_and_comma_rows_skipped(self, tmp_path: Path) -> None:
        source = CardCollection.with_samples()
        path = tmp_path / "samples.csv"
        source.export_csv(path)
        with path.open("a", encoding="utf-8") as f:
            f.write("\n")
        restored = CardCollection.from_csv(path)
        assert [c.name for c in restored] == ["Black Lotus", "Lightning Bolt"]

    def test_blank_text_field_row_skipped(self, empty_collection: CardCollection, tmp_path: Path) -> None:
        path = write_lines(
            tmp_path / "blank.csv",
            HEADER,
            " ,Common,Excellent,5.50,Unlimited,Instant,Red,1,Instant,No",
        )
        assert empty_collection.import_csv(path) == 0

    def test_missing_file(self, empty_collection: CardCollection, tmp_path: Path) -> None:
        with pytest.raises(CollectionIOError, match="reading"):
            empty_collection.import_csv(tmp_path / "nope.csv")
        assert empty_collection.is_empty()

    def test_empty_file(self, empty_collection: CardCollection, tmp_path: Path) -> None:
        path = tmp_path / "empty.csv"
        path.write_text("", encoding="utf-8")
        assert empty_collection.import_csv(path) == 0

    def test_non_finite_value_row_skipped(self, empty_collection: CardCollection, tmp_path: Path, caplog) -> None:
        path = write_lines(
            tmp_path / "nan.csv",
            HEADER,
            "Bolt,Common,Excellent,nan,Unlimited,Instant,Red,1,Instant,No",
            "Serra Angel,Uncommon,Near Mint,inf,Alpha,Creature,White,5,Angel,Yes",
            "Shivan Dragon,Rare,Good,120.00,Beta,Creature,Red,6,Dragon,No",
        )
        with caplog.at_level(logging.WARNING, logger="mtg_collection_tracker.collection"):
            assert empty_collection.import_csv(path) == 1

        assert [c.name for c in empty_collection] == ["Shivan Dragon"]
        assert len(caplog.records) == 2
        assert "Error importing card: Bolt" in caplog.records[0].getMessage()
        stats = empty_collection.statistics()
        assert stats.total_value == 120.00
        assert stats.count_for("Rare") == 1

    def test_read_fault_keeps_earlier_rows(
        self, empty_collection: CardCollection, tmp_path: Path, monkeypatch
    ) -> None:
        path = write_lines(
            tmp_path / "fault.csv",
            HEADER,
            "Bolt,Common,Excellent,5.50,Unlimited,Instant,Red,1,Instant,No",
            "Serra Angel,Uncommon,Near Mint,2.25,Alpha,Creature,White,5,Angel,Yes",
            "Shivan Dragon,Rare,Good,120.00,Beta,Creature,Red,6,Dragon,No",
        )
        read_rows = csv_codec.read_rows

        def failing_read_rows(f):
            rows = read_rows(f)
            yield next(rows)
            yield next(rows)
            raise OSError("Input/output error")

        monkeypatch.setattr(csv_codec, "read_rows", failing_read_rows)

        with pytest.raises(CollectionIOError, match="Input/output error"):
            empty_collection.import_csv(path)
        assert [c.name for c in empty_collection] == ["Bolt", "Serra Angel"]

    def test_undecodable_bytes_midway_keep_earlier_rows(
        self, empty_collection: CardCollection, tmp_path: Path
    ) -> None:
        row = "Bolt,Common,Excellent,5.50,Unlimited,Instant,Red,1,Instant,No\n"
        path = tmp_path / "broken.csv"
        # Far more than one read buffer of good rows before the bad byte.
        path.write_bytes((HEADER + "\n" + row * 1000).encode("utf-8") + b"\xff\xfe,bad\n")

        with pytest.raises(CollectionIOError, match="reading"):
            empty_collection.import_csv(path)
        assert 0 < len(empty_collection) < 1000
        assert empty_collection.get(0).name == "Bolt"
