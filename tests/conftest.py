"""Shared fixtures: a small Chinese emoticon corpus and engines built on it."""

import pytest

from emoticon_replacer import EmoticonReplacer, SearchEngine


@pytest.fixture
def sample_entries():
    return [
        {"text": "= =", "keywords": ["无语", "黑脸", "无奈", "翻白眼"], "weight": 1.0, "category": ""},
        {"text": "(╯°□°）╯︵ ┻━┻", "keywords": ["掀桌", "愤怒", "生气", "暴躁"], "weight": 1.0, "category": ""},
        {"text": "ヽ(´▽`)/", "keywords": ["开心", "高兴", "快乐", "兴奋"], "weight": 1.0, "category": ""},
        {"text": "_(:3」∠)_", "keywords": ["躺平", "摆烂", "咸鱼", "懒"], "weight": 1.0, "category": ""},
    ]


@pytest.fixture
def engine(sample_entries):
    search_engine = SearchEngine()
    search_engine.build_index(sample_entries)
    return search_engine


@pytest.fixture
def replacer(engine):
    return EmoticonReplacer(engine)
