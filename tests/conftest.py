from collections.abc import Callable
from datetime import date

import pytest

from deadline_reminder.scanner.models import AnnotationRecord, Attribution, DeadlineDate

SAMPLE_SOURCE = """\
import 'package:flutter_deadline/flutter_deadline.dart';

@Deadline(
  year: 2025,
  month: 1,
  day: 1,
  description: 'New Year cleanup - remove legacy authentication',
  slackMention: '@channel',
)
class LegacyAuthService {
  Future<bool> authenticate(String username, String password) async {
    // Old authentication logic
    return false;
  }
}

@Deadline(year: 2025, month: 12, day: 9, description: "Remove temporary logging")
void debugLogger(String message) {
  print('[DEBUG] $message');
}

@Deadline(year: 2030, month: 6, day: 15)
const bool enableFutureFeature = false;

// @Deadline(year: 2020, month: 1, day: 1)
/*
@Deadline(year: 2021, month: 1, day: 1)
*/
class AppConfig {
  @Deadline(year: 2025, month: 1, day: 10)
  static String get legacyApiUrl => 'https://old-api.example.com';
}
"""


@pytest.fixture()
def sample_source() -> str:
    """Dart source with four live annotations and two commented-out ones."""
    return SAMPLE_SOURCE


@pytest.fixture()
def make_record() -> Callable[..., AnnotationRecord]:
    def _make(
        deadline: date = date(2025, 1, 1),
        source_path: str = "lib/legacy.dart",
        line_number: int = 3,
        element_name: str = "LegacyAuthService",
        code_excerpt: str = "class LegacyAuthService {}",
        description: str | None = None,
        mention_directive: str | None = None,
        author: str | None = None,
        email: str = "",
    ) -> AnnotationRecord:
        record = AnnotationRecord(
            source_path=source_path,
            line_number=line_number,
            deadline=DeadlineDate(deadline.year, deadline.month, deadline.day),
            code_excerpt=code_excerpt,
            element_name=element_name,
            description=description,
            mention_directive=mention_directive,
        )
        if author is not None:
            record = record.with_attribution(Attribution(author_name=author, author_email=email))
        return record

    return _make
