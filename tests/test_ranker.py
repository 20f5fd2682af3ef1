"""
Unit tests for BM25 ranking and exact matching.
"""

import math

import pytest

from emoticon_replacer import Ranker, SearchEngine


def idf(N, df):
    return math.log((N - df + 0.5) / (df + 0.5) + 1)


def build(entries):
    engine = SearchEngine()
    engine.build_index(entries)
    return engine


class TestBM25Contribution:
    """Test the per-term formula"""

    def test_average_length_document(self):
        ranker = Ranker()
        # tf=1, doc_len == avg: (1 * 2.5) / (1 + 1.5) = 1.0
        assert ranker.bm25_contribution(1, 1.0, 4, 4) == pytest.approx(1.0)

    def test_length_normalization(self):
        ranker = Ranker()
        short = ranker.bm25_contribution(1, 1.0, 2, 4)
        long = ranker.bm25_contribution(1, 1.0, 8, 4)
        assert short > long

    def test_saturation(self):
        ranker = Ranker()
        assert ranker.bm25_contribution(10, 1.0, 4, 4) < 2.5


class TestSearch:
    """Test ranked retrieval over the sample corpus"""

    def test_best_match(self, engine):
        results = engine.search("我很开心", top_k=5, threshold=0)

        assert results[0].text == "ヽ(´▽`)/"
        assert results[0].score > 0
        assert results[0].matched_keywords == ["开心"]

    def test_whole_term_dominates_single_character(self, engine):
        whole = engine.search("开心")[0]
        single = engine.search("开")[0]

        assert whole.text == single.text == "ヽ(´▽`)/"
        assert whole.score > single.score
        assert whole.score > 2.0
        assert single.score < 1.0

    def test_exact_scores(self, engine):
        term_idf = idf(4, 1)
        # whole keyword + two characters at char weight 0.6, all at average length
        assert engine.search("开心")[0].score == pytest.approx(term_idf * (1 + 0.6 * 2))
        assert engine.search("开")[0].score == pytest.approx(term_idf * 0.6)

    def test_results_bounded_sorted_and_above_threshold(self, engine):
        results = engine.search("无语 开心 生气 躺平", top_k=2, threshold=0.5)

        assert len(results) <= 2
        assert all(r.score > 0.5 for r in results)
        assert [r.score for r in results] == sorted((r.score for r in results), reverse=True)

    def test_threshold_filters_everything(self, engine):
        assert engine.search("开心", threshold=3.0) == []

    def test_top_k_zero(self, engine):
        assert engine.search("开心", top_k=0) == []

    def test_no_match(self, engine):
        assert engine.search("不存在") == []

    def test_empty_query(self, engine):
        assert engine.search("") == []
        assert engine.search("!!! ...") == []

    def test_empty_corpus(self):
        assert build([]).search("开心") == []
        assert SearchEngine().search("开心") == []

    def test_matched_keywords_in_corpus_order(self, engine):
        results = engine.search("黑脸 无语")
        assert results[0].matched_keywords == ["无语", "黑脸"]

    def test_weight_multiplies_score(self):
        engine = build([
            {"text": "B", "keywords": ["开心"]},
            {"text": "A", "keywords": ["开心"], "weight": 2.0},
        ])
        results = engine.search("开心")

        assert [r.text for r in results] == ["A", "B"]
        assert results[0].score == pytest.approx(2 * results[1].score)

    def test_ties_keep_corpus_order(self):
        engine = build([
            {"text": "first", "keywords": ["开心"]},
            {"text": "second", "keywords": ["开心"]},
            {"text": "third", "keywords": ["开心"]},
        ])
        assert [r.text for r in engine.search("开心")] == ["first", "second", "third"]

    def test_scores_are_reproducible(self, sample_entries):
        a = build(sample_entries).search("我很开心 无语")
        b = build(sample_entries).search("我很开心 无语")
        assert [(r.text, r.score) for r in a] == [(r.text, r.score) for r in b]

    def test_category_is_reported(self):
        engine = build([{"text": "A", "keywords": ["开心"], "category": "happy"}])
        assert engine.search("开心")[0].category == "happy"


class TestBorrowing:
    """A query character that is not a term of its own borrows keyword credit"""

    def test_character_borrows_whole_term_strength(self):
        engine = build([
            {"text": "A", "keywords": ["ok", "fine"]},
            {"text": "B", "keywords": ["yes"]},
        ])
        results = engine.search("kx")

        # 'k' sits inside the keyword "ok": tf=1, doc_len=2, avg_doc_len=1.5
        expected = idf(2, 1) * 2.5 / (1 + 1.5 * (1 - 0.75 + 0.75 * (2 / 1.5)))
        assert [r.text for r in results] == ["A"]
        assert results[0].score == pytest.approx(expected)
        assert results[0].matched_keywords == []

    def test_borrowing_is_scoped_per_document(self):
        engine = build([
            {"text": "A", "keywords": ["ok"]},
            {"text": "B", "keywords": ["k", "z"]},
        ])
        scores = {r.text: r.score for r in engine.search("kx")}

        # A borrows from "ok", using the IDF of the keyword "k" (df=1)
        assert scores["A"] == pytest.approx(idf(2, 1) * 2.5 / (1 + 1.5 * (1 - 0.75 + 0.75 * (1 / 1.5))))
        # B has no multi-character keyword with 'k', so it only gets character credit
        assert scores["B"] == pytest.approx(0.6 * idf(2, 2))

    def test_single_character_term_does_not_borrow(self):
        engine = build([
            {"text": "A", "keywords": ["ok"]},
            {"text": "B", "keywords": ["no"]},
        ])
        results = engine.search("k")

        assert [r.text for r in results] == ["A"]
        assert results[0].score == pytest.approx(0.6 * idf(2, 1))


class TestExactMatch:
    """Test literal substring matching"""

    def test_substring_match(self, engine):
        results = engine.exact_match("无语黑脸")

        assert results[0].text == "= ="
        assert results[0].matched_keywords == ["无语", "黑脸"]
        assert results[0].score == pytest.approx(2.0)

    def test_sorted_and_uncapped(self, engine):
        results = engine.exact_match("开心又无语又黑脸还想躺平摆烂咸鱼懒")

        assert [r.text for r in results] == ["_(:3」∠)_", "= =", "ヽ(´▽`)/"]
        assert [r.score for r in results] == [4.0, 2.0, 1.0]

    def test_weight_scales_exact_score(self):
        engine = build([{"text": "A", "keywords": ["开心"], "weight": 1.5}])
        assert engine.exact_match("好开心")[0].score == pytest.approx(1.5)

    def test_no_match(self, engine):
        assert engine.exact_match("没有关键词") == []
        assert engine.exact_match("") == []
