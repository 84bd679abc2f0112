"""Pydantic models for scan configuration and results"""

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


DEFAULT_IGNORE_DIRS = frozenset({'vendor'})


class ScanConfig(BaseModel):
    """Immutable settings shared by discovery, scanning and rendering for one run"""

    model_config = ConfigDict(frozen=True)

    skip_hidden: bool = Field(default=True, description='Skip entries whose name starts with a dot')
    ignore_dirs: frozenset[str] = Field(
        default=DEFAULT_IGNORE_DIRS, description='Directory name prefixes whose subtrees are skipped'
    )
    ignore_exts: frozenset[str] = Field(default=frozenset(), description='File name suffixes that are excluded')
    line_length_limit: int = Field(default=1000, ge=0, description='Lines longer than this (in bytes) are skipped')
    include_vendor: bool = Field(default=False, description='Scan vendor directories even if ignored')

    @field_validator('ignore_dirs', 'ignore_exts', mode='before')
    @classmethod
    def _drop_empty(cls, value):
        # An empty prefix or suffix would match every entry
        if value is None:
            return frozenset()
        return frozenset(v for v in value if v)

    @computed_field
    @property
    def effective_ignore_dirs(self) -> frozenset[str]:
        """Directory prefixes to skip once include_vendor is taken into account."""
        if self.include_vendor:
            return self.ignore_dirs - {'vendor'}
        return self.ignore_dirs

    @classmethod
    def from_options(
        cls,
        skip_hidden: bool = True,
        ignore_dirs=DEFAULT_IGNORE_DIRS,
        ignore_exts=(),
        line_length_limit: int = 1000,
        include_vendor: bool = False,
    ) -> 'ScanConfig':
        return cls(
            skip_hidden=skip_hidden,
            ignore_dirs=frozenset(ignore_dirs),
            ignore_exts=frozenset(ignore_exts),
            line_length_limit=line_length_limit,
            include_vendor=include_vendor,
        )


class Match(BaseModel):
    """A single tag found on one line of a file"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    line_number: int = Field(..., ge=1, alias='lineNumber', description='Line number (1-based)')
    tag: str = Field(..., description='Tag keyword, e.g. TODO')
    label: str = Field(..., description='Display label for the tag')
    author: str = Field(default='', description='Author given in parentheses after the tag')
    message: str = Field(..., min_length=1, description='Trimmed comment text after the tag')


class ScanResult(BaseModel):
    """All matches found in one file, in line order"""

    filename: str
    matches: list[Match] = Field(default_factory=list)

    @property
    def has_matches(self) -> bool:
        return bool(self.matches)

    def to_json(self, indent: int = 2) -> str:
        return self.model_dump_json(indent=indent, by_alias=True)
