import pytest

from deadline_reminder.notification.exceptions import TemplateError
from deadline_reminder.notification.template import MessageTemplate


class TestValidation:
    def test_empty(self) -> None:
        with pytest.raises(TemplateError):
            MessageTemplate("")

    def test_unclosed_placeholder(self) -> None:
        with pytest.raises(TemplateError, match="Unclosed"):
            MessageTemplate("Due {{deadline")

    def test_nested_json_objects_are_text(self) -> None:
        source = '{"text": "{{count}} due: {{elementName}}", "unfurl": {"links": true}}'
        rendered = MessageTemplate(source).render(
            {"count": "1", "date": "2025-01-01"}, [{"elementName": "A"}]
        )
        assert rendered == '{"text": "1 due: A", "unfurl": {"links": true}}'

    def test_unknown_placeholder(self) -> None:
        with pytest.raises(TemplateError, match="Unknown"):
            MessageTemplate("{{elementName}} by {{owner}}")

    def test_plain_braces_are_text(self) -> None:
        MessageTemplate("map = {} and {{ }}")


class TestRender:
    def test_globals_and_per_record_copies(self) -> None:
        template = MessageTemplate("[{{count}} on {{ date }}] {{elementName}}")
        rendered = template.render(
            {"count": "2", "date": "2025-01-01"},
            [{"elementName": "A"}, {"elementName": "B"}],
        )
        assert rendered == "[2 on 2025-01-01] A\n\n[2 on 2025-01-01] B"

    def test_missing_value(self) -> None:
        template = MessageTemplate("{{author}}")
        with pytest.raises(TemplateError):
            template.render({}, [{}])
