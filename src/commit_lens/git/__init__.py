from commit_lens.git.memory import InMemoryCommit, InMemoryHistory
from commit_lens.git.subprocess_history import GitHistory, get_git_repo_root, parse_line_porcelain

__all__ = [
    "GitHistory",
    "InMemoryCommit",
    "InMemoryHistory",
    "get_git_repo_root",
    "parse_line_porcelain",
]
