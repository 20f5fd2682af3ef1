"""
Unit tests for corpus index construction.
"""

import math

import pytest

from emoticon_replacer import CorpusEntry, Indexer, SearchEngine, ValidationError


def expected_idf(N, df):
    return math.log((N - df + 0.5) / (df + 0.5) + 1)


class TestIndexer:
    """Test per-entry tables, averages and IDF"""

    def setup_method(self):
        self.indexer = Indexer()

    def test_document_tables(self, sample_entries):
        index = self.indexer.build_index(sample_entries)
        doc = index.documents[0]

        assert doc.entry.text == "= ="
        assert doc.term_frequency == {"无语": 1, "黑脸": 1, "无奈": 1, "翻白眼": 1}
        assert doc.char_frequency["无"] == 2
        assert doc.doc_length == 4
        assert doc.char_doc_length == 9

    def test_multi_term_char_index_skips_single_character_keywords(self, sample_entries):
        index = self.indexer.build_index(sample_entries)
        doc = index.documents[3]

        assert doc.multi_term_char_index["躺"] == ["躺平"]
        assert "懒" not in doc.multi_term_char_index

    def test_averages(self, sample_entries):
        index = self.indexer.build_index(sample_entries)

        assert index.avg_doc_length == pytest.approx(4.0)
        assert index.avg_char_doc_length == pytest.approx((9 + 8 + 8 + 7) / 4)

    def test_idf_values(self, sample_entries):
        index = self.indexer.build_index(sample_entries)

        assert index.idf["无语"] == pytest.approx(expected_idf(4, 1))
        # "兴" appears twice in one entry but still counts once for df
        assert index.char_idf["兴"] == pytest.approx(expected_idf(4, 1))

    def test_idf_never_negative(self):
        index = self.indexer.build_index([
            {"text": "A", "keywords": ["same"]},
            {"text": "B", "keywords": ["same"]},
        ])
        assert index.idf["same"] == pytest.approx(expected_idf(2, 2))
        assert index.idf["same"] > 0

    def test_duplicate_keywords(self):
        index = self.indexer.build_index([{"text": "A", "keywords": ["开心", "开心"]}])
        doc = index.documents[0]

        assert doc.term_frequency == {"开心": 2}
        assert doc.multi_term_char_index["开"] == ["开心"]

    def test_accepts_entries_and_legacy_keys(self):
        index = self.indexer.build_index([
            CorpusEntry(text="= =", keywords=["无语"]),
            {"emoticon": "(´・ω・`)", "keywords": ["疑惑"]},
            {"kaomoji": "(^_^)", "keywords": ["微笑"], "weight": 2},
        ])
        assert [d.entry.text for d in index.documents] == ["= =", "(´・ω・`)", "(^_^)"]
        assert index.documents[2].entry.weight == 2.0

    @pytest.mark.parametrize("weight", [0, -2.5, "heavy", None])
    def test_unusable_weight_falls_back_to_default(self, weight):
        engine = SearchEngine()
        engine.build_index([{"text": "A", "keywords": ["开心"], "weight": weight}])

        assert engine.documents[0].entry.weight == 1.0
        assert engine.search("开心")[0].text == "A"

    def test_empty_corpus(self):
        index = self.indexer.build_index([])

        assert len(index) == 0
        assert index.avg_doc_length == 0.0
        assert index.idf == {}

    @pytest.mark.parametrize("bad", ["无语", {"text": "= ="}, None, 42])
    def test_rejects_non_sequences(self, bad):
        with pytest.raises(ValidationError):
            self.indexer.build_index(bad)

    def test_rejects_malformed_item(self):
        with pytest.raises(ValidationError, match="Item 1"):
            self.indexer.build_index([
                {"text": "= =", "keywords": ["无语"]},
                {"text": "= =", "keywords": []},
            ])

    def test_rebuild_is_deterministic(self, sample_entries):
        first = self.indexer.build_index(sample_entries)
        second = self.indexer.build_index(sample_entries)

        assert first.idf == second.idf
        assert first.char_idf == second.char_idf


class TestIndexReplacement:
    """A failed rebuild must leave the current index alone"""

    def test_failed_build_keeps_previous_index(self, engine):
        previous = engine.index

        with pytest.raises(ValidationError):
            engine.build_index("not a list")

        assert engine.index is previous
        assert engine.search("开心")

    def test_rebuild_replaces_index(self, engine):
        engine.build_index([{"text": "(^_^)", "keywords": ["微笑"]}])

        assert len(engine.documents) == 1
        assert engine.search("开心") == []
        assert engine.search("微笑")[0].text == "(^_^)"

    def test_fresh_engine_is_empty(self):
        assert SearchEngine().documents == []

    def test_later_entry_changes_do_not_reach_the_index(self):
        entries = [
            CorpusEntry(text="A", keywords=["开心"]),
            CorpusEntry(text="B", keywords=["高兴"]),
        ]
        engine = SearchEngine()
        engine.build_index(entries)
        before = [(r.text, r.score, r.matched_keywords) for r in engine.search("开心")]

        entries[0].weight = 0.0
        entries[0].keywords.append("无语")

        after = [(r.text, r.score, r.matched_keywords) for r in engine.search("开心")]
        assert before and after == before
        assert engine.documents[0].entry.keywords == ["开心"]
        assert engine.documents[0].entry.weight == 1.0
        assert engine.search("无语") == []
