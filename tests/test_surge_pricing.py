import pytest

from stellaraid.fee.error import InvalidFeeValue
from stellaraid.fee.surge_pricing import (
    FeeTrend,
    SurgePricingAnalyzer,
    SurgePricingConfig,
    SurgePricingLevel,
)


@pytest.fixture
def analyzer():
    return SurgePricingAnalyzer(SurgePricingConfig())


def test_surge_pricing_config_default():
    config = SurgePricingConfig()
    assert config.normal_base_fee == 100
    assert config.warn_threshold_percent == 150.0
    assert config.critical_threshold_percent == 300.0
    assert config.window_size == 10


@pytest.mark.parametrize(
    "percent, level",
    [
        (100.0, SurgePricingLevel.NORMAL),
        (120.0, SurgePricingLevel.ELEVATED),
        (200.0, SurgePricingLevel.HIGH),
        (500.0, SurgePricingLevel.CRITICAL),
        (150.0, SurgePricingLevel.HIGH),
        (300.0, SurgePricingLevel.CRITICAL),
    ],
)
def test_detect_level(analyzer, percent, level):
    assert analyzer.detect_level(percent) is level


def test_surge_level_names():
    assert SurgePricingLevel.NORMAL.display_name() == "Normal"
    assert SurgePricingLevel.ELEVATED.display_name() == "Elevated"
    assert SurgePricingLevel.HIGH.display_name() == "High"
    assert SurgePricingLevel.CRITICAL.display_name() == "Critical"


def test_surge_level_descriptions():
    assert SurgePricingLevel.NORMAL.description() == "Network fees are normal"
    assert SurgePricingLevel.CRITICAL.description() == "Network is congested - high fees"


def test_analyzer_normal_fee(analyzer):
    analysis = analyzer.analyze(100)
    assert analysis.surge_level is SurgePricingLevel.NORMAL
    assert not analysis.is_surge
    assert analysis.surge_percent == 100.0
    assert analysis.recommendation == "Fees are normal. Safe to proceed."
    assert analysis.trend is FeeTrend.STABLE


def test_analyzer_surge_fee(analyzer):
    analysis = analyzer.analyze(250)
    assert analysis.surge_level is SurgePricingLevel.HIGH
    assert analysis.is_surge
    assert analysis.current_fee == 250
    assert analysis.normal_fee == 100


def test_analyzer_invalid_fee(analyzer):
    with pytest.raises(InvalidFeeValue):
        analyzer.analyze(-100)


def test_zero_normal_fee_means_normal():
    analyzer = SurgePricingAnalyzer(SurgePricingConfig(normal_base_fee=0))
    analysis = analyzer.analyze(500)
    assert analysis.surge_percent == 100.0
    assert analysis.surge_level is SurgePricingLevel.NORMAL


def test_average_fee(analyzer):
    for fee in (100, 200, 300):
        analyzer.analyze(fee)
    assert analyzer.average_fee() == 200.0
    assert analyzer.max_fee() == 300
    assert analyzer.min_fee() == 100


def test_empty_history(analyzer):
    assert analyzer.average_fee() is None
    assert analyzer.max_fee() is None
    assert analyzer.min_fee() is None


def test_reset_history(analyzer):
    analyzer.analyze(100)
    analyzer.reset_history()
    assert analyzer.average_fee() is None


def test_window_size_limits_history():
    analyzer = SurgePricingAnalyzer(SurgePricingConfig(window_size=3))
    for fee in (1, 2, 3, 4):
        analyzer.analyze(fee)
    assert analyzer.min_fee() == 2
    assert analyzer.max_fee() == 4


def test_fee_trend(analyzer):
    for fee in range(100, 110):
        analyzer.analyze(fee)
    analysis = analyzer.analyze(150)
    assert analysis.trend is FeeTrend.INCREASING


def test_fee_trend_decreasing(analyzer):
    for fee in (200, 200, 100):
        analyzer.analyze(fee)
    analysis = analyzer.analyze(100)
    assert analysis.trend is FeeTrend.DECREASING


def test_trend_emoji():
    assert FeeTrend.INCREASING.emoji() == "📈"
    assert FeeTrend.STABLE.emoji() == "➡️"
    assert FeeTrend.DECREASING.emoji() == "📉"