"""Link annotation for task text."""

import re

# PR and issue URLs, skipping ones already used as a markdown link target
GITHUB_URL_RE = re.compile(
    r"(?<!\]\()https?://github\.com/([^/\s]+)/([^/\s]+)/(pull|issues?)/(\d+)"
)


def annotate_github_urls(text: str) -> str:
    """
    Turn GitHub PR/issue URLs into `[number](url)` markdown links.

    >>> annotate_github_urls("See https://github.com/acme/app/pull/924")
    'See [924](https://github.com/acme/app/pull/924)'
    """
    return GITHUB_URL_RE.sub(lambda m: f"[{m.group(4)}]({m.group(0)})", text)
