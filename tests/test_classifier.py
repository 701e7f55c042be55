"""
Test eligibility checks, capture dates and the WhatsApp heuristics.
"""

from datetime import datetime
from pathlib import Path

import pytest

from mediasort.classifier import Classifier
from mediasort.errors import RejectedEntryError
from mediasort.models import CaptureDate, Category, CategorySelection, SortOptions
from mediasort.timestamps import capture_date_from_mtime, is_whatsapp_stem, whatsapp_date_from_stem

MTIME = datetime(2021, 1, 7, 9, 30, 0)
ROOT = Path("/media/source")


def classify(name: str, size: int = 1024, options: SortOptions = SortOptions()):
    return Classifier(options).classify(ROOT / name, size=size, mtime=MTIME, source_root=ROOT)


class TestWhatsAppNames:
    """Test the positional WhatsApp file name convention."""

    def test_video_name(self):
        date = whatsapp_date_from_stem("VID-20230526-WA0009")
        assert date == CaptureDate("2023", "05", "26", "MAI")
        assert date.month_folder == "05 MAI"

    def test_image_name(self):
        date = whatsapp_date_from_stem("IMG-20130830-WA0000")
        assert (date.year, date.month_folder, date.day) == ("2013", "08 AOUT", "30")

    @pytest.mark.parametrize("stem", [
        "IMG_20130830_WA0000",   # underscores
        "PIC-20130830-WA0000",   # unknown prefix
        "IMG-20130830-XX0000",   # wrong marker
        "IMG-2013",              # too short for the marker
        "img-20130830-WA0000",   # prefixes are case-sensitive
    ])
    def test_non_matching_names(self, stem):
        assert not is_whatsapp_stem(stem)
        assert whatsapp_date_from_stem(stem) is None

    @pytest.mark.parametrize("stem", ["IMG-2013ab30-WA0000", "IMG-20131330-WA0000"])
    def test_unusable_embedded_date(self, stem):
        assert is_whatsapp_stem(stem)
        assert whatsapp_date_from_stem(stem) is None

    def test_mtime_date_uses_month_table(self):
        date = capture_date_from_mtime(datetime(2024, 12, 3))
        assert date == CaptureDate("2024", "12", "03", "DECEMBRE")

    def test_injected_month_table(self):
        months = {f"{n:02d}": f"M{n}" for n in range(1, 13)}
        date = whatsapp_date_from_stem("VID-20230526-WA0009", months)
        assert date.month_folder == "05 M5"


class TestClassification:
    """Test classifier output for eligible files."""

    def test_date_from_modification_time(self):
        entry = classify("DCIM/photo.JPG")
        assert entry.extension == ".jpg"
        assert entry.category is Category.PICTURE
        assert entry.capture_date == CaptureDate("2021", "01", "07", "JANVIER")
        assert not entry.is_special_origin
        assert entry.destination_path is None

    def test_whatsapp_name_overrides_date(self):
        entry = classify("Phone/VID-20230526-WA0009.mp4")
        assert entry.is_special_origin
        assert entry.category is Category.MOVIE
        assert entry.capture_date == CaptureDate("2023", "05", "26", "MAI")

    def test_whatsapp_folder_keeps_file_date(self):
        entry = classify("whatsapp/holiday.jpg")
        assert entry.is_special_origin
        assert entry.capture_date.year == "2021"

    def test_folder_keyword_must_match_whole_component(self):
        entry = classify("WhatsApp Images/holiday.jpg")
        assert not entry.is_special_origin

    def test_bad_whatsapp_date_falls_back(self):
        entry = classify("IMG-20131330-WA0000.jpg")
        assert entry.is_special_origin
        assert entry.capture_date.month_folder == "01 JANVIER"

    def test_unknown_extension_accepted_with_all(self):
        entry = classify("notes.txt")
        assert entry.category is Category.UNKNOWN


class TestRejection:
    """Test the ordered eligibility checks."""

    def test_no_extension(self):
        with pytest.raises(RejectedEntryError, match="no extension"):
            classify("README")

    def test_selection_filters_category(self):
        options = SortOptions(selection=CategorySelection.PICTURES)
        with pytest.raises(RejectedEntryError, match=r"filtered out.*\.mp4"):
            classify("clip.mp4", options=options)

    def test_movies_selection_rejects_unknown(self):
        options = SortOptions(selection=CategorySelection.MOVIES)
        with pytest.raises(RejectedEntryError, match="filtered out"):
            classify("notes.txt", options=options)

    def test_hidden_file(self):
        with pytest.raises(RejectedEntryError, match="hidden"):
            classify(".trash/photo.jpg")

    def test_hidden_source_root_is_allowed(self):
        root = Path("/home/user/.phone-backup")
        entry = Classifier(SortOptions()).classify(root / "a.jpg", 10, MTIME, source_root=root)
        assert entry.category is Category.PICTURE

    def test_exception_rule(self):
        with pytest.raises(RejectedEntryError, match="exception rule"):
            classify("WhatsApp/Media/WhatsApp Images/Sent/IMG-20230526-WA0001.jpg")

    def test_exception_filter_disabled(self):
        options = SortOptions(exception_filter=False)
        entry = classify("WhatsApp/Media/WhatsApp Images/Sent/IMG-20230526-WA0001.jpg",
                         options=options)
        assert entry.is_special_origin

    def test_check_order_extension_before_hidden(self):
        options = SortOptions(selection=CategorySelection.PICTURES)
        with pytest.raises(RejectedEntryError, match="filtered out"):
            classify(".hidden/clip.mp4", options=options)

    def test_min_size_disabled_by_default(self):
        entry = classify("tiny.jpg", size=1)
        assert entry.size == 1

    def test_min_size_enabled(self):
        options = SortOptions(min_file_size=200 * 1024)
        with pytest.raises(RejectedEntryError, match="too small"):
            classify("tiny.jpg", size=1024, options=options)
        assert classify("big.jpg", size=200 * 1024, options=options).size == 200 * 1024
