from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from diffreview_core.diff import DiffFile, Hunk
    from diffreview_core.models import PRDetails


def render_hunk(hunk: Hunk) -> str:
    """Return the hunk header followed by every change prefixed with its line number.

    The number is the one the model must echo back as ``lineNumber``: the
    new-file line when the change has one, otherwise the old-file line.
    """
    lines = [hunk.header]
    lines.extend(f"{change.line_number} {change.content}" for change in hunk.changes)
    return "\n".join(lines)


def build_prompt(file: DiffFile, hunk: Hunk, pr_details: PRDetails) -> str:
    """Build the review prompt for a single hunk."""
    return f"""Your task is to review pull requests. Instructions:
- Provide the response in the following JSON format: {{"reviews": [{{"lineNumber": <line_number>, "reviewComment": "<review comment>"}}]}}
- Do not give positive comments or compliments.
- Provide comments and suggestions ONLY if there is something to improve, otherwise "reviews" should be an empty array.
- Write the comment in GitHub Markdown format.
- Use the given description only for the overall context and only comment on the code.
- IMPORTANT: NEVER suggest adding comments to the code.

Review the following code diff in the file "{file.target_path}" and take the pull request title and description into account when writing the response.

Pull request title: {pr_details.title}
Pull request description:

---
{pr_details.description}
---

Git diff to review:

```diff
{render_hunk(hunk)}
```
"""  # noqa: E501
