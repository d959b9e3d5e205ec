import re

from deadline_reminder.scanner.models import AnnotationRecord

_NOREPLY_WITH_ID = re.compile(r"^\d+\+([^@]+)@users\.noreply\.[^@]+$")
_NOREPLY_LEGACY = re.compile(r"^([^@]+)@users\.noreply\.[^@]+$")


def extract_github_username(email: str) -> str | None:
    """Username from a GitHub noreply address.

    ``12345678+octocat@users.noreply.github.com`` and the older
    ``octocat@users.noreply.github.com`` both yield ``octocat``.
    """
    for pattern in (_NOREPLY_WITH_ID, _NOREPLY_LEGACY):
        match = pattern.match(email)
        if match:
            return match.group(1)
    return None


def slack_user_mention(user_id: str) -> str:
    return f"<@{user_id}>"


def resolve_mention(record: AnnotationRecord, mention_map: dict[str, str]) -> str | None:
    """Who to mention for a record; first match wins.

    Explicit ``slackMention`` argument, then the author's GitHub username, raw
    email and display name looked up in ``mention_map``.
    """
    if record.mention_directive:
        return record.mention_directive

    attribution = record.attribution
    if attribution is None or not mention_map:
        return None

    if attribution.author_email:
        username = extract_github_username(attribution.author_email)
        if username and username in mention_map:
            return slack_user_mention(mention_map[username])
        if attribution.author_email in mention_map:
            return slack_user_mention(mention_map[attribution.author_email])

    if attribution.author_name in mention_map:
        return slack_user_mention(mention_map[attribution.author_name])
    return None
