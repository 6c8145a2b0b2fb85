import logging
import os

PAGE_TITLE = "Final Grade Calculator | Required Final Exam Score"
PAGE_ICON = "📝"
LAYOUT = "centered"

LOG_LEVEL = os.environ.get("FINAL_GRADE_LOG_LEVEL", "WARNING").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = LOG_LEVEL) -> None:
    # basicConfig is a no-op once the root logger has handlers, so Streamlit reruns are safe
    logging.basicConfig(level=getattr(logging, level, logging.WARNING), format=LOG_FORMAT)
