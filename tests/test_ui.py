from __future__ import annotations

from pathlib import Path

from streamlit.testing.v1 import AppTest

UI_FILE = Path(__file__).resolve().parents[1] / "ui.py"


def test_page_renders_without_upload() -> None:
    at = AppTest.from_file(str(UI_FILE)).run()
    assert not at.exception
    assert at.title[0].value == "Post or Nah?"
    assert [i.value for i in at.info] == ["Upload a photo to get a verdict."]
    assert at.multiselect[0].value == ["General vibe"]
