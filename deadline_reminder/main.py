import sys
from datetime import date
from pathlib import Path

from deadline_reminder.config.settings import Settings
from deadline_reminder.logging.logger import Log
from deadline_reminder.processor.processor import build_processor


def main() -> int:
    """Entry point: load settings -> build pipeline -> scan and notify."""
    settings = Settings()
    Log.configure(settings.log_level, workflow_commands=settings.github_actions)
    Log.info(f"Language: {settings.language}")
    Log.info(f"Notify days before: {settings.notify_days_before}")
    Log.info(f"Notify past deadlines: {settings.notify_past_deadlines}")

    try:
        processor = build_processor(settings)
        processor.process(
            source_root=Path(settings.scan_directory).resolve(),
            reference_date=settings.reference_date or date.today(),
        )
    except Exception as exc:
        Log.error(f"Deadline reminder failed: {exc}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
