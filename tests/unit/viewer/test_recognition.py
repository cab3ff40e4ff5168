import asyncio

import cv2
import numpy as np
import pytest

from contracts.recognition_dto import DetectedCode, OutcomeKind, RecognitionOutcome
from recycle_viewer.domain.exceptions import ViewerError
from recycle_viewer.domain.images import DecodedImage
from recycle_viewer.domain.interfaces import IBarcodeDetector, IRecyclabilityLookup
from recycle_viewer.recognition import (
    RecognitionCoordinator,
    RecognitionRun,
    RecognitionState,
    ReferenceCodeLookup,
    YamlCodeLookup,
    ZXingBarcodeDetector,
)

REFERENCE = "9780078821233"


class StaticDetector(IBarcodeDetector):
    """Детектор для тестов: всегда возвращает заданные коды."""

    def __init__(self, codes):
        self.codes = codes
        self.calls = 0

    def detect(self, pixels):
        self.calls += 1
        return list(self.codes)


class FailingDetector(IBarcodeDetector):
    def detect(self, pixels):
        raise RuntimeError("scanner unavailable")


@pytest.fixture
def image():
    return DecodedImage(pixels=np.zeros((10, 10, 3), dtype=np.uint8))


def recognize(coordinator, image, run=None):
    return asyncio.run(coordinator.recognize(image, run))


def test_matching_code_gives_match_found(image):
    """Тест: код, равный эталону -> MATCH_FOUND."""
    code = DetectedCode(value=REFERENCE, format="EAN13")
    coordinator = RecognitionCoordinator(StaticDetector([code]), ReferenceCodeLookup(REFERENCE))

    outcome = recognize(coordinator, image)

    assert outcome.kind is OutcomeKind.MATCH_FOUND
    assert outcome.code == code


def test_other_code_gives_no_match(image):
    """Тест: другой код -> NO_MATCH с первым найденным кодом."""
    codes = [DetectedCode(value="096619756803", format="UPCA"), DetectedCode(value="1", format="QRCode")]
    coordinator = RecognitionCoordinator(StaticDetector(codes), ReferenceCodeLookup(REFERENCE))

    outcome = recognize(coordinator, image)

    assert outcome.kind is OutcomeKind.NO_MATCH
    assert outcome.code == codes[0]
    assert outcome.detected == codes


def test_match_anywhere_in_result_wins(image):
    """Тест: MATCH_FOUND если совпал хотя бы один код."""
    codes = [DetectedCode(value="1"), DetectedCode(value=REFERENCE)]
    coordinator = RecognitionCoordinator(StaticDetector(codes), ReferenceCodeLookup(REFERENCE))

    outcome = recognize(coordinator, image)

    assert outcome.kind is OutcomeKind.MATCH_FOUND
    assert outcome.code.value == REFERENCE


def test_empty_result_gives_no_code(image):
    coordinator = RecognitionCoordinator(StaticDetector([]))

    outcome = recognize(coordinator, image)

    assert outcome.kind is OutcomeKind.NO_CODE
    assert outcome.is_available


def test_detector_error_gives_failed(image):
    """Тест: ошибка детектора -> FAILED, отличается от NO_CODE."""
    coordinator = RecognitionCoordinator(FailingDetector())

    outcome = recognize(coordinator, image)

    assert outcome.kind is OutcomeKind.FAILED
    assert not outcome.is_available
    assert "scanner unavailable" in outcome.error


class BrokenLookup(IRecyclabilityLookup):
    def lookup(self, code):
        raise KeyError("reference table unavailable")


def test_lookup_error_gives_failed(image):
    """Тест: ошибка справочника -> FAILED, run не остаётся в PENDING."""
    code = DetectedCode(value=REFERENCE, format="EAN13")
    coordinator = RecognitionCoordinator(StaticDetector([code]), BrokenLookup())
    run = RecognitionRun()

    outcome = recognize(coordinator, image, run)

    assert outcome.kind is OutcomeKind.FAILED
    assert "reference table unavailable" in outcome.error
    assert run.state is RecognitionState.FAILED


def test_run_has_exactly_one_transition(image):
    """Тест: PENDING -> терминальное состояние, повторный переход запрещён."""
    run = RecognitionRun()
    assert run.state is RecognitionState.PENDING

    coordinator = RecognitionCoordinator(StaticDetector([]))
    recognize(coordinator, image, run)

    assert run.state is RecognitionState.NO_CODE
    assert run.state.is_terminal
    with pytest.raises(RuntimeError):
        run.resolve(RecognitionOutcome.no_code())


def test_two_invocations_are_independent():
    """Тест: два вызова на разных изображениях дают независимые результаты."""

    class BrightnessDetector(IBarcodeDetector):
        def detect(self, pixels):
            if pixels.mean() > 127:
                return [DetectedCode(value=REFERENCE)]
            return []

    coordinator = RecognitionCoordinator(BrightnessDetector(), ReferenceCodeLookup(REFERENCE))
    bright = DecodedImage(pixels=np.full((4, 4, 3), 255, dtype=np.uint8))
    dark = DecodedImage(pixels=np.zeros((4, 4, 3), dtype=np.uint8))
    runs = [RecognitionRun(), RecognitionRun()]

    async def both():
        return await asyncio.gather(
            coordinator.recognize(bright, runs[0]),
            coordinator.recognize(dark, runs[1]),
        )

    first, second = asyncio.run(both())

    assert first.kind is OutcomeKind.MATCH_FOUND
    assert second.kind is OutcomeKind.NO_CODE
    assert [r.state for r in runs] == [RecognitionState.MATCH_FOUND, RecognitionState.NO_CODE]


def test_yaml_lookup(tmp_path):
    """Тест: список перерабатываемых кодов из YAML."""
    codes_file = tmp_path / "codes.yaml"
    codes_file.write_text('recyclable:\n  - "9780078821233"\n  - 96619756803\n', encoding="utf-8")

    lookup = YamlCodeLookup(codes_file)

    assert lookup.lookup("9780078821233")
    assert lookup.lookup("96619756803")
    assert not lookup.lookup("123")


def test_yaml_lookup_missing_file(tmp_path):
    with pytest.raises(ViewerError):
        YamlCodeLookup(tmp_path / "missing.yaml")


def test_yaml_lookup_requires_list(tmp_path):
    codes_file = tmp_path / "codes.yaml"
    codes_file.write_text("recyclable: 123\n", encoding="utf-8")

    with pytest.raises(ViewerError, match="списком"):
        YamlCodeLookup(codes_file)


def test_zxing_detector_reads_qr_code():
    """Тест: zxing-cpp находит QR-код на синтетическом изображении."""
    qr = cv2.QRCodeEncoder.create().encode(REFERENCE)
    qr = cv2.resize(qr, None, fx=8, fy=8, interpolation=cv2.INTER_NEAREST)
    qr = cv2.copyMakeBorder(qr, 40, 40, 40, 40, cv2.BORDER_CONSTANT, value=255)
    pixels = cv2.cvtColor(qr, cv2.COLOR_GRAY2BGR)

    codes = ZXingBarcodeDetector().detect(pixels)

    assert [c.value for c in codes] == [REFERENCE]
    assert codes[0].format


def test_zxing_detector_blank_image():
    codes = ZXingBarcodeDetector().detect(np.full((100, 100, 3), 255, dtype=np.uint8))

    assert codes == []
