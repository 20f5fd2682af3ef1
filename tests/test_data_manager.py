"""
Unit tests for corpus loading, validation and editing.
"""

import json
import logging

import pytest

from emoticon_replacer import CorpusEntry, EmoticonDataManager, ValidationError, validate_data


@pytest.fixture
def manager(sample_entries):
    data = [dict(item) for item in sample_entries]
    data[0]["category"] = "无语"
    data[1]["category"] = "生气"
    return EmoticonDataManager().load_from_array(data)


class TestValidateData:
    """Test corpus validation without loading"""

    def test_valid(self, sample_entries):
        assert validate_data(sample_entries) == (True, [])

    def test_not_a_list(self):
        valid, errors = validate_data({"text": "= ="})
        assert not valid
        assert errors == ["Data must be an array"]

    def test_collects_every_problem(self):
        valid, errors = validate_data([
            {"text": "= =", "keywords": ["无语"]},
            {"keywords": ["开心"]},
            {"text": "(^_^)", "keywords": "微笑"},
            {"text": "T_T", "keywords": ["哭"], "weight": -1},
            "not an object",
        ])

        assert not valid
        assert len(errors) == 4
        assert errors[0].startswith("Item 1:")
        assert "'keywords'" in errors[1]
        assert "weight" in errors[2]
        assert errors[3].startswith("Item 4:")


class TestLoading:
    """Test the loaders"""

    def test_load_from_array(self, manager):
        assert len(manager.entries) == 4
        assert manager.entries[0].category == "无语"

    def test_invalid_items_are_skipped(self, caplog):
        with caplog.at_level(logging.WARNING):
            manager = EmoticonDataManager().load_from_array([
                {"text": "= =", "keywords": ["无语"]},
                {"text": "", "keywords": ["开心"]},
                {"text": "T_T", "keywords": ["哭"], "weight": 0},
                {"text": "(^_^)", "keywords": [" 微笑 ", ""]},
            ])

        assert [e.text for e in manager.entries] == ["= =", "(^_^)"]
        assert manager.entries[1].keywords == ["微笑"]
        assert "Item 1" in caplog.text
        assert "Item 2" in caplog.text

    def test_legacy_payload_key(self):
        manager = EmoticonDataManager().load_from_array([{"emoticon": "(´・ω・`)", "keywords": ["疑惑"]}])
        assert manager.entries[0].text == "(´・ω・`)"

    def test_load_from_array_rejects_non_list(self):
        with pytest.raises(ValidationError):
            EmoticonDataManager().load_from_array({"text": "= ="})

    def test_load_from_json(self):
        manager = EmoticonDataManager().load_from_json('[{"text": "= =", "keywords": ["无语"]}]')
        assert manager.get_all_keywords() == ["无语"]

    def test_load_from_json_rejects_bad_json(self):
        with pytest.raises(ValidationError, match="Invalid JSON"):
            EmoticonDataManager().load_from_json("[{not json")

    def test_load_from_file(self, tmp_path, sample_entries):
        path = tmp_path / "corpus.json"
        path.write_text(json.dumps(sample_entries, ensure_ascii=False), encoding="utf-8")

        manager = EmoticonDataManager().load_from_file(path)
        assert len(manager.entries) == 4

    def test_reload_replaces_entries(self, manager):
        manager.load_from_array([{"text": "(^_^)", "keywords": ["微笑"]}])
        assert [e.text for e in manager.entries] == ["(^_^)"]


class TestReading:
    """Test the read accessors"""

    def test_reads_return_copies(self, manager):
        entry = manager.get_entry_by_text("= =")
        entry.keywords.append("改了")
        manager.get_all_entries()[0].keywords.clear()

        assert "改了" not in manager.get_keywords_by_text("= =")
        assert manager.get_keywords_by_text("= =") == ["无语", "黑脸", "无奈", "翻白眼"]

    def test_missing_entry(self, manager):
        assert manager.get_entry_by_text("不存在") is None
        assert manager.get_keywords_by_text("不存在") == []

    def test_categories(self, manager):
        assert manager.get_all_categories() == ["无语", "生气"]
        assert [e.text for e in manager.filter_by_category("无语")] == ["= ="]
        assert len(manager.filter_by_category(["无语", "生气"])) == 2

    def test_find_by_keyword(self, manager):
        assert [e.text for e in manager.find_by_keyword("开心")] == ["ヽ(´▽`)/"]
        assert manager.find_by_keyword("不存在") == []

    def test_stats(self, manager):
        stats = manager.get_stats()

        assert stats["total_entries"] == 4
        assert stats["total_keywords"] == 16
        assert stats["total_categories"] == 2
        assert stats["average_keywords_per_entry"] == pytest.approx(4.0)

    def test_stats_empty(self):
        assert EmoticonDataManager().get_stats()["average_keywords_per_entry"] == 0


class TestEditing:
    """Test keyword and entry editing"""

    def test_add_keyword(self, manager):
        assert manager.add_keyword("= =", " 呵呵 ")
        assert manager.get_keywords_by_text("= =")[-1] == "呵呵"

    def test_add_keyword_rejections(self, manager):
        assert not manager.add_keyword("不存在", "呵呵")
        assert not manager.add_keyword("= =", "   ")
        assert not manager.add_keyword("= =", "无语")

    def test_remove_keyword(self, manager):
        assert manager.remove_keyword("= =", "无语")
        assert "无语" not in manager.get_keywords_by_text("= =")
        assert not manager.remove_keyword("= =", "无语")

    def test_cannot_remove_last_keyword(self):
        manager = EmoticonDataManager().load_from_array([{"text": "= =", "keywords": ["无语"]}])
        assert not manager.remove_keyword("= =", "无语")
        assert manager.get_keywords_by_text("= =") == ["无语"]

    def test_update_keywords(self, manager):
        assert manager.update_keywords("= =", [" 呵呵 ", "", "服了"])
        assert manager.get_keywords_by_text("= =") == ["呵呵", "服了"]
        assert not manager.update_keywords("= =", ["  "])
        assert not manager.update_keywords("= =", [])

    def test_set_category_and_weight(self, manager):
        assert manager.set_category("= =", "日常")
        assert manager.get_entry_by_text("= =").category == "日常"
        assert manager.set_category("= =", None)
        assert manager.get_entry_by_text("= =").category == ""

        assert manager.set_weight("= =", 2)
        assert manager.get_entry_by_text("= =").weight == 2.0
        assert not manager.set_weight("= =", 0)
        assert not manager.set_weight("= =", True)

    def test_add_entry(self, manager):
        assert manager.add_entry({"text": "(^_^)", "keywords": ["微笑"]})
        assert manager.get_entry_by_text("(^_^)").keywords == ["微笑"]
        assert not manager.add_entry({"text": "(^_^)", "keywords": ["笑"]})
        assert not manager.add_entry({"text": "T_T", "keywords": []})

    def test_remove_entry(self, manager):
        assert manager.remove_entry("= =")
        assert manager.get_entry_by_text("= =") is None
        assert not manager.remove_entry("= =")

    def test_update_entry_keeps_position(self, manager):
        assert manager.update_entry("= =", {"text": "-_-", "keywords": ["无语"]})
        assert manager.entries[0].text == "-_-"

    def test_update_entry_rejects_collision(self, manager):
        assert not manager.update_entry("= =", {"text": "ヽ(´▽`)/", "keywords": ["无语"]})
        assert not manager.update_entry("不存在", {"text": "x", "keywords": ["y"]})

    def test_batch_operations(self, manager):
        assert manager.batch_set_category(["= =", "ヽ(´▽`)/", "不存在"], "日常") == 2
        assert manager.batch_remove(["= =", "不存在"]) == 1
        assert len(manager.entries) == 3

        manager.clear()
        assert manager.entries == []


class TestExport:
    """Test export and save"""

    def test_export_to_array(self, manager):
        exported = manager.export_to_array()
        assert exported[0] == {
            "text": "= =",
            "keywords": ["无语", "黑脸", "无奈", "翻白眼"],
            "weight": 1.0,
            "category": "无语",
        }

    def test_export_to_json_keeps_unicode(self, manager):
        assert "无语" in manager.export_to_json()
        assert "\n" not in manager.export_to_json(pretty=False)

    def test_save_and_reload(self, manager, tmp_path):
        path = tmp_path / "out.json"
        manager.save_to_file(path)

        reloaded = EmoticonDataManager().load_from_file(path)
        assert reloaded.export_to_array() == manager.export_to_array()

    def test_entries_feed_the_engine(self, manager):
        entries = manager.get_all_entries()
        assert all(isinstance(e, CorpusEntry) for e in entries)
