from intake.config.settings import Settings
from intake.ocr.base import BaseOcrEngine
from intake.ocr.tesseract_adapter import TesseractAdapter


class OcrEngineFactory:
    """Creates the OCR adapter named by ``settings.ocr_engine``."""

    ENGINES: dict[str, type[TesseractAdapter]] = {
        "tesseract": TesseractAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseOcrEngine:
        engine = settings.ocr_engine.strip().lower()
        engine_cls = cls.ENGINES.get(engine)
        if engine_cls is None:
            raise ValueError(
                f"Unknown OCR engine '{engine}'. Choose from: {list(cls.ENGINES)}"
            )
        return engine_cls(
            languages=settings.ocr_languages,
            timeout_seconds=settings.ocr_timeout_seconds,
        )
