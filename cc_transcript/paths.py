"""
Path encoding utilities for Claude Code project folders.

Claude Code stores each project's sessions in ~/.claude/projects/<encoded>/,
where <encoded> is the absolute project path with every character outside
[A-Za-z0-9] replaced by '-'.

WARNING: This encoding is LOSSY - decoding is impossible.
To get the real path, read the `cwd` field from session records.
"""

from __future__ import annotations

import re
from pathlib import Path

__all__ = ['encode_project_path']

_NON_ALPHANUMERIC = re.compile(r'[^A-Za-z0-9]')


def encode_project_path(path: Path | str) -> str:
    """
    Encode an absolute directory path as its project folder name.

    Args:
        path: Absolute project directory

    Returns:
        Folder name under the projects directory

    Examples:
        >>> encode_project_path('/Users/chris/project')
        '-Users-chris-project'

        >>> encode_project_path('/Users/chris/My Project.app')
        '-Users-chris-My-Project-app'

        >>> encode_project_path('/home/me/my_repo')
        '-home-me-my-repo'
    """
    return _NON_ALPHANUMERIC.sub('-', str(path))
