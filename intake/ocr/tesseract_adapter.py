import io
from typing import Any

import pytesseract
from PIL import Image

from intake.logging.logger import Log
from intake.ocr.base import BaseOcrEngine
from intake.ocr.exceptions import OcrError, OcrTimeoutError
from intake.ocr.models import OcrResult


class TesseractAdapter(BaseOcrEngine):
    """Runs Tesseract through pytesseract.

    A single ``image_to_data`` call yields both the words (reassembled into
    lines) and per-word confidences, which are averaged into the document
    confidence.
    """

    name = "tesseract"

    def __init__(self, languages: str = "eng+heb", timeout_seconds: int = 30) -> None:
        self._languages = languages
        self._timeout_seconds = timeout_seconds

    def recognize(self, image_bytes: bytes) -> OcrResult:
        image = self._open_image(image_bytes)
        try:
            data = pytesseract.image_to_data(
                image,
                lang=self._languages,
                timeout=self._timeout_seconds,
                output_type=pytesseract.Output.DICT,
            )
        except pytesseract.TesseractError as exc:
            raise OcrError(f"tesseract failed: {exc}") from exc
        except RuntimeError as exc:
            # pytesseract signals a killed process with a bare RuntimeError
            if "timeout" in str(exc).lower():
                raise OcrTimeoutError(
                    f"tesseract exceeded {self._timeout_seconds}s timeout"
                ) from exc
            raise OcrError(f"tesseract failed: {exc}") from exc
        except OSError as exc:
            raise OcrError(f"tesseract is not available: {exc}") from exc

        text = self._assemble_text(data)
        confidence = self._mean_confidence(data)
        Log.debug(
            f"tesseract recognized {len(text)} chars "
            f"(lang={self._languages}, confidence={confidence})"
        )
        return OcrResult(text=text, confidence=confidence)

    def _open_image(self, image_bytes: bytes) -> Image.Image:
        try:
            image = Image.open(io.BytesIO(image_bytes))
            image.load()
        except Exception as exc:
            raise OcrError(f"cannot decode image: {exc}") from exc
        if image.mode not in {"RGB", "L"}:
            image = image.convert("RGB")
        return image

    @staticmethod
    def _assemble_text(data: dict[str, list[Any]]) -> str:
        lines: dict[tuple[int, int, int, int], list[str]] = {}
        for i, word in enumerate(data.get("text", [])):
            word = str(word).strip()
            if not word:
                continue
            key = (
                int(data["page_num"][i]),
                int(data["block_num"][i]),
                int(data["par_num"][i]),
                int(data["line_num"][i]),
            )
            lines.setdefault(key, []).append(word)
        return "\n".join(" ".join(words) for words in lines.values()).strip()

    @staticmethod
    def _mean_confidence(data: dict[str, list[Any]]) -> float | None:
        scores: list[float] = []
        for word, conf in zip(data.get("text", []), data.get("conf", [])):
            try:
                score = float(conf)
            except (TypeError, ValueError):
                continue
            if score >= 0 and str(word).strip():
                scores.append(score)
        if not scores:
            return None
        return round(min(max(sum(scores) / len(scores) / 100, 0.0), 1.0), 4)
