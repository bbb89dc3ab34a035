# tests/test_config.py
import pytest

from study_perf.config import (
    DEFAULT_CONFIG, FlaggingCriteria, PerformanceThresholds, ScoreWeights, config_from_dict, load_config,
)
from study_perf.errors import InvalidInputError


def test_defaults():
    assert DEFAULT_CONFIG.weights == ScoreWeights(0.3, 0.25, 0.25, 0.2)
    assert DEFAULT_CONFIG.thresholds == PerformanceThresholds(85, 70, 50, 30)
    assert DEFAULT_CONFIG.flagging == FlaggingCriteria(60, 7, 0.4, 50)


def test_negative_weight_rejected():
    with pytest.raises(InvalidInputError):
        ScoreWeights(study_time=-0.1, quest_completion=0.5, consistency=0.3, deadline_adherence=0.3)


def test_weights_not_summing_to_one_are_kept():
    weights = ScoreWeights(study_time=0.5, quest_completion=0.5, consistency=0.5, deadline_adherence=0.5)
    assert weights.study_time == 0.5


def test_thresholds_must_ascend():
    with pytest.raises(InvalidInputError):
        PerformanceThresholds(excellent=60, good=70, needs_attention=50, critical=30)


def test_config_from_dict_overlays_defaults():
    config = config_from_dict({"flagging": {"max_days_since_last_study": 3}})
    assert config.flagging.max_days_since_last_study == 3
    assert config.flagging.min_performance_score == 60
    assert config.weights == DEFAULT_CONFIG.weights


def test_config_from_dict_empty():
    assert config_from_dict({}) is DEFAULT_CONFIG
    assert config_from_dict(None) is DEFAULT_CONFIG


def test_config_from_dict_unknown_section():
    with pytest.raises(InvalidInputError):
        config_from_dict({"colors": {}})


def test_config_from_dict_unknown_key():
    with pytest.raises(InvalidInputError):
        config_from_dict({"weights": {"effort": 0.1}})


def test_config_from_dict_section_not_mapping():
    with pytest.raises(InvalidInputError):
        config_from_dict({"thresholds": [1, 2, 3]})


def test_config_from_dict_validates_values():
    with pytest.raises(InvalidInputError):
        config_from_dict({"thresholds": {"good": 99}})


def test_load_config(tmp_path):
    path = tmp_path / "perf.yaml"
    path.write_text(
        "weights:\n"
        "  study_time: 0.4\n"
        "  quest_completion: 0.2\n"
        "  consistency: 0.2\n"
        "  deadline_adherence: 0.2\n"
        "thresholds:\n"
        "  excellent: 90\n"
    )
    config = load_config(str(path))
    assert config.weights.study_time == 0.4
    assert config.thresholds.excellent == 90
    assert config.thresholds.good == 70


def test_load_config_empty_file(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(str(path)) == DEFAULT_CONFIG


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "missing.yaml"))


def test_flagging_criteria_reject_strings_from_yaml():
    with pytest.raises(InvalidInputError):
        config_from_dict({"flagging": {"max_days_since_last_study": "7"}})


def test_flagging_criteria_reject_negative_values():
    with pytest.raises(InvalidInputError):
        FlaggingCriteria(min_performance_score=-1)


def test_flagging_quest_rate_is_a_fraction():
    with pytest.raises(InvalidInputError):
        FlaggingCriteria(min_quest_completion_rate=40)
