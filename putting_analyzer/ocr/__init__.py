from .card_converter import (
    OcrPuttReading,
    OcrHoleReading,
    convert_ocr_putt,
    convert_ocr_hole,
    convert_ocr_batch,
)
from .scorecard_reader import ScorecardReader, ScorecardReading, image_to_data_url

__all__ = [
    'OcrPuttReading',
    'OcrHoleReading',
    'convert_ocr_putt',
    'convert_ocr_hole',
    'convert_ocr_batch',
    'ScorecardReader',
    'ScorecardReading',
    'image_to_data_url',
]
