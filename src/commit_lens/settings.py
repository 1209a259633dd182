import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, field_validator

_DEFAULT_EXTENSIONS = [".js", ".css"]
_DEFAULT_EXCLUDE_DIRS = ["node_modules", ".git"]


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    extensions: list[str] = _DEFAULT_EXTENSIONS
    exclude_dirs: list[str] = _DEFAULT_EXCLUDE_DIRS
    output_dir: Path = Path("meta")
    loc_filename: str = "loc.csv"
    filesize_filename: str = "filesize.csv"
    commit_url_template: str = "https://github.com/YOUR_REPO/commit/{commit}"

    @field_validator("extensions")
    @classmethod
    def _normalize_extensions(cls, value: list[str]) -> list[str]:
        normalized: list[str] = []
        for ext in value:
            ext = ext.strip().lower()
            if not ext:
                continue
            if not ext.startswith("."):
                ext = "." + ext
            if ext not in normalized:
                normalized.append(ext)
        if not normalized:
            raise ValueError("At least one file extension must be tracked.")
        return normalized

    @property
    def loc_path(self) -> Path:
        return self.output_dir / self.loc_filename

    @property
    def filesize_path(self) -> Path:
        return self.output_dir / self.filesize_filename

    def commit_url(self, commit: str) -> str:
        return self.commit_url_template.format(commit=commit)


def _split_env_list(name: str) -> list[str] | None:
    raw = os.getenv(name)
    if raw is None:
        return None
    return [part.strip() for part in raw.split(",") if part.strip()]


def load_settings(**overrides: object) -> Settings:
    """Build settings from ``COMMIT_LENS_*`` environment variables.

    Keyword overrides that are not ``None`` take precedence over the environment.
    """
    values: dict[str, object] = {}
    extensions = _split_env_list("COMMIT_LENS_EXTENSIONS")
    if extensions is not None:
        values["extensions"] = extensions
    exclude_dirs = _split_env_list("COMMIT_LENS_EXCLUDE_DIRS")
    if exclude_dirs is not None:
        values["exclude_dirs"] = exclude_dirs
    output_dir = os.getenv("COMMIT_LENS_OUTPUT_DIR")
    if output_dir:
        values["output_dir"] = Path(output_dir)
    commit_url = os.getenv("COMMIT_LENS_COMMIT_URL")
    if commit_url:
        values["commit_url_template"] = commit_url
    values.update({k: v for k, v in overrides.items() if v is not None})
    return Settings.model_validate(values)
