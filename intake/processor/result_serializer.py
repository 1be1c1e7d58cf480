from intake.processor.models import IngestionResult


class ResultSerializer:
    """Converts an IngestionResult to the JSON-serializable shape callers persist."""

    def serialize(self, result: IngestionResult) -> dict[str, object]:
        extraction: dict[str, object] = {"engine": result.extraction.engine}
        if result.extraction.confidence is not None:
            extraction["confidence"] = result.extraction.confidence
        return {
            "file": {
                "originalName": result.filename,
                "type": result.media_type,
                "sha256": result.content_sha256,
            },
            "scan": {
                "clean": result.scan.clean,
                "threats": list(result.scan.threats),
                "durationMs": round(result.scan.duration_ms, 3),
            },
            "extraction": extraction,
            "fields": self._fields(result),
            "textPreview": result.text_preview,
            "vendorClassification": {
                "originalName": result.vendor_classification.original_name,
                "level": result.vendor_classification.level.value,
                "maskedName": result.vendor_classification.masked_name,
            },
            "retention": self._retention(result),
            "createdAt": result.created_at.isoformat(),
        }

    def _fields(self, result: IngestionResult) -> dict[str, object]:
        fields = result.fields
        return {
            "amount": fields.amount,
            "currency": fields.currency,
            "date": fields.date,
            "vendor": fields.vendor,
            "amountFormat": fields.amount_format.value if fields.amount_format else None,
            "dateFormat": fields.date_format,
        }

    def _retention(self, result: IngestionResult) -> dict[str, object]:
        decision = result.retention
        return {
            "decision": decision.disposition.value,
            "filePolicy": decision.file_policy,
            "horizonDays": decision.horizon.days if decision.horizon else None,
            "retainUntil": decision.retain_until.isoformat() if decision.retain_until else None,
        }
