import pytest

from signalbar.classifier import classify
from signalbar.config import ClassifierConfig
from signalbar.contracts.types import LteMeasurement, MeasurementKind, NetworkClass, ReadingStatus, SignalLevel
from signalbar.levels.thresholds import DEFAULT_THRESHOLDS

RSRP = DEFAULT_THRESHOLDS[(MeasurementKind.POWER, NetworkClass.TERRESTRIAL)]
RSRQ = DEFAULT_THRESHOLDS[(MeasurementKind.QUALITY, NetworkClass.TERRESTRIAL)]
RSSNR = DEFAULT_THRESHOLDS[(MeasurementKind.NOISE_RATIO, NetworkClass.TERRESTRIAL)]
NTN_RSRP = DEFAULT_THRESHOLDS[(MeasurementKind.POWER, NetworkClass.NON_TERRESTRIAL)]
NTN_RSRQ = DEFAULT_THRESHOLDS[(MeasurementKind.QUALITY, NetworkClass.NON_TERRESTRIAL)]
NTN_RSSNR = DEFAULT_THRESHOLDS[(MeasurementKind.NOISE_RATIO, NetworkClass.NON_TERRESTRIAL)]

POOR, MODERATE, GOOD, GREAT = 0, 1, 2, 3
MIN_RSRP = -140
MIN_RSRQ = -34
MAX_RSRQ = 3
MIN_RSSNR = -20
MAX_RSSNR = 30

ALL_KINDS = frozenset(MeasurementKind)


def _rsrq_report(rsrp: int, rsrq: int):
    config = ClassifierConfig(
        lte_rsrp_thresholds=RSRP,
        lte_rsrq_thresholds=RSRQ,
        lte_signal_bar_kinds=frozenset({MeasurementKind.POWER, MeasurementKind.QUALITY}),
    )
    return classify(LteMeasurement(rsrp=rsrp, rsrq=rsrq, rssnr=-25), config)


def _rssnr_report(rsrp: int, rssnr: int):
    config = ClassifierConfig(
        lte_rsrp_thresholds=RSRP,
        lte_rssnr_thresholds=RSSNR,
        lte_signal_bar_kinds=frozenset({MeasurementKind.POWER, MeasurementKind.NOISE_RATIO}),
    )
    return classify(LteMeasurement(rsrp=rsrp, rsrq=15, rssnr=rssnr), config)


def _full_report(rsrp: int, rsrq: int, rssnr: int, is_ntn: bool):
    config = ClassifierConfig(
        lte_rsrp_thresholds=RSRP,
        lte_rsrq_thresholds=RSRQ,
        lte_rssnr_thresholds=RSSNR,
        ntn_lte_rsrp_thresholds=NTN_RSRP,
        ntn_lte_rsrq_thresholds=NTN_RSRQ,
        ntn_lte_rssnr_thresholds=NTN_RSSNR,
        lte_signal_bar_kinds=ALL_KINDS,
        ntn_lte_signal_bar_kinds=ALL_KINDS,
    )
    return classify(LteMeasurement(rsrp=rsrp, rsrq=rsrq, rssnr=rssnr), config, is_ntn=is_ntn)


def _expected_row(cap: SignalLevel) -> list[SignalLevel]:
    # Levels for the secondary reading at its floor and each boundary, capped by RSRP.
    return [SignalLevel.NONE_OR_UNKNOWN] + [SignalLevel(min(level, cap)) for level in range(1, 5)]


def test_validate_input_accessors() -> None:
    assert _rsrq_report(-60, 4).rsrq == ReadingStatus.INVALID
    assert _rsrq_report(-60, 3).rsrq == 3
    assert _rsrq_report(-60, -34).rsrq == -34
    assert _rsrq_report(-60, -35).rsrq == ReadingStatus.INVALID
    assert _rssnr_report(-60, 31).rssnr == ReadingStatus.INVALID
    assert _rssnr_report(-60, 30).rssnr == 30
    assert _rssnr_report(60, -20).rssnr == -20
    assert _rssnr_report(60, -21).rssnr == ReadingStatus.INVALID


def test_validate_input_accessors_on_ntn() -> None:
    rsrp = NTN_RSRP[GREAT]
    rssnr = NTN_RSSNR[GREAT]

    assert _full_report(rsrp, MAX_RSRQ + 1, rssnr, True).rsrq == ReadingStatus.INVALID
    assert _full_report(rsrp, MAX_RSRQ, rssnr, True).rsrq == 3
    assert _full_report(rsrp, MIN_RSRQ - 1, rssnr, True).rsrq == ReadingStatus.INVALID
    assert _full_report(rsrp, MIN_RSRQ, rssnr, True).rsrq == -34

    rsrq = NTN_RSRQ[GREAT]
    assert _full_report(rsrp, rsrq, MAX_RSSNR + 1, True).rssnr == ReadingStatus.INVALID
    assert _full_report(rsrp, rsrq, MAX_RSSNR, True).rssnr == 30
    assert _full_report(rsrp, rsrq, MIN_RSSNR - 1, True).rssnr == ReadingStatus.INVALID
    assert _full_report(rsrp, rsrq, MIN_RSSNR, True).rssnr == -20


@pytest.mark.parametrize(
    "rsrp, cap",
    [
        (-98, SignalLevel.GREAT),
        (-108, SignalLevel.GOOD),
        (-118, SignalLevel.MODERATE),
        (-128, SignalLevel.POOR),
        (-138, SignalLevel.NONE_OR_UNKNOWN),
    ],
)
def test_rsrq_thresholds_capped_by_rsrp(rsrp: int, cap: SignalLevel) -> None:
    values = [MIN_RSRQ, *RSRQ]
    levels = [_rsrq_report(rsrp, rsrq).level for rsrq in values]

    if cap == SignalLevel.NONE_OR_UNKNOWN:
        assert levels == [SignalLevel.NONE_OR_UNKNOWN] * 5
    else:
        assert levels == _expected_row(cap)


@pytest.mark.parametrize(
    "rsrp, cap",
    [
        (-98, SignalLevel.GREAT),
        (-108, SignalLevel.GOOD),
        (-118, SignalLevel.MODERATE),
        (-128, SignalLevel.POOR),
        (-138, SignalLevel.NONE_OR_UNKNOWN),
    ],
)
def test_rssnr_thresholds_capped_by_rsrp(rsrp: int, cap: SignalLevel) -> None:
    values = [MIN_RSSNR, *RSSNR]
    levels = [_rssnr_report(rsrp, rssnr).level for rssnr in values]

    if cap == SignalLevel.NONE_OR_UNKNOWN:
        assert levels == [SignalLevel.NONE_OR_UNKNOWN] * 5
    else:
        assert levels == _expected_row(cap)


@pytest.mark.parametrize("is_ntn", [True, False])
@pytest.mark.parametrize("rsrp_index", [GREAT, GOOD, MODERATE, POOR, None])
def test_rsrq_with_all_kinds_enabled(is_ntn: bool, rsrp_index: int | None) -> None:
    rsrp_table, rsrq_table, rssnr_table = (NTN_RSRP, NTN_RSRQ, NTN_RSSNR) if is_ntn else (RSRP, RSRQ, RSSNR)
    rsrp = MIN_RSRP if rsrp_index is None else rsrp_table[rsrp_index]
    rssnr = rssnr_table[GREAT]

    levels = [_full_report(rsrp, rsrq, rssnr, is_ntn).level for rsrq in [MIN_RSRQ, *rsrq_table]]

    if rsrp_index is None:
        assert levels == [SignalLevel.NONE_OR_UNKNOWN] * 5
    else:
        assert levels == _expected_row(SignalLevel(rsrp_index + 1))


@pytest.mark.parametrize("is_ntn", [True, False])
@pytest.mark.parametrize("rsrp_index", [GREAT, GOOD, MODERATE, POOR, None])
def test_rssnr_with_all_kinds_enabled(is_ntn: bool, rsrp_index: int | None) -> None:
    rsrp_table, rsrq_table, rssnr_table = (NTN_RSRP, NTN_RSRQ, NTN_RSSNR) if is_ntn else (RSRP, RSRQ, RSSNR)
    rsrp = MIN_RSRP if rsrp_index is None else rsrp_table[rsrp_index]
    rsrq = rsrq_table[GREAT]

    levels = [_full_report(rsrp, rsrq, rssnr, is_ntn).level for rssnr in [MIN_RSSNR, *rssnr_table]]

    if rsrp_index is None:
        assert levels == [SignalLevel.NONE_OR_UNKNOWN] * 5
    else:
        assert levels == _expected_row(SignalLevel(rsrp_index + 1))


def test_same_readings_switch_tables_with_network_class() -> None:
    terrestrial = _full_report(-88, -17, 17, False)
    ntn = _full_report(-88, -17, 17, True)

    assert terrestrial.level_of(MeasurementKind.QUALITY) == SignalLevel.MODERATE
    assert ntn.level_of(MeasurementKind.QUALITY) == SignalLevel.POOR
    assert terrestrial.level == SignalLevel.MODERATE
    assert ntn.level == SignalLevel.POOR


def test_worst_of_three_kinds() -> None:
    report = classify(
        LteMeasurement(rsrp=-85, rsrq=-6, rssnr=-10),
        ClassifierConfig(lte_signal_bar_kinds=ALL_KINDS),
    )

    assert report.level_of(MeasurementKind.POWER) == SignalLevel.GREAT
    assert report.level_of(MeasurementKind.QUALITY) == SignalLevel.GREAT
    assert report.level_of(MeasurementKind.NOISE_RATIO) == SignalLevel.NONE_OR_UNKNOWN
    assert report.level == SignalLevel.NONE_OR_UNKNOWN


def test_default_config_uses_rsrp_only() -> None:
    report = classify(LteMeasurement(rsrp=-85, rsrq=99, rssnr=-10))

    assert report.enabled_kinds == frozenset({MeasurementKind.POWER})
    assert report.level == SignalLevel.GREAT
    assert report.rsrq == ReadingStatus.INVALID


def test_classification_is_idempotent() -> None:
    measurement = LteMeasurement(rsrp=-110, rsrq=-15, rssnr=4)
    config = ClassifierConfig(lte_signal_bar_kinds=ALL_KINDS)

    assert classify(measurement, config) == classify(measurement, config)


def test_unreported_readings() -> None:
    report = classify(LteMeasurement(), ClassifierConfig(lte_signal_bar_kinds=ALL_KINDS))

    assert report.level == SignalLevel.NONE_OR_UNKNOWN
    assert report.rsrp == ReadingStatus.NOT_REPORTED
    assert report.rsrq == ReadingStatus.NOT_REPORTED
    assert report.rssnr == ReadingStatus.NOT_REPORTED


def test_empty_mask_reports_power_as_enabled() -> None:
    report = classify(
        LteMeasurement(rsrp=-85, rsrq=-30),
        ClassifierConfig(lte_signal_bar_kinds=frozenset()),
    )

    assert report.enabled_kinds == frozenset({MeasurementKind.POWER})
    assert report.level == SignalLevel.GREAT
