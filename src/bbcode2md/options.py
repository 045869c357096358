#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbcode2md/options.py
"""Configuration options for BBCode to Markdown conversion.

Options are immutable; use :meth:`CloneFrozenMixin.create_updated` to derive a
modified copy.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, fields, replace
from typing import Any, Mapping

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from bbcode2md.constants import DEFAULT_CLEANER_ORDER, LANGUAGE_ALIASES
from bbcode2md.exceptions import ValidationError


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class BBCodeConverterOptions(CloneFrozenMixin):
    """Configuration options for the BBCode cleaner pipeline.

    Parameters
    ----------
    disabled_cleaners : tuple[str, ...], default ()
        Names of built-in cleaners to leave out of the pipeline, e.g.
        ``("remove_color",)`` keeps ``[color]`` tags in the output.
    language_aliases : Mapping[str, str], default {}
        Extra BBCode code language aliases, merged over the built-in table.
        Keys are matched case-insensitively.

    Examples
    --------
    Keep images as BBCode:
        >>> options = BBCodeConverterOptions(disabled_cleaners=("replace_images",))

    Map ``[code=py]`` onto ``python`` fences:
        >>> options = BBCodeConverterOptions(language_aliases={"py": "python"})

    """

    disabled_cleaners: tuple[str, ...] = field(
        default=(),
        metadata={
            "help": "Built-in cleaners to skip",
            "choices": list(DEFAULT_CLEANER_ORDER),
            "importance": "core",
        },
    )
    language_aliases: Mapping[str, str] = field(
        default_factory=dict,
        metadata={
            "help": "Extra code language aliases (BBCode language -> fence language)",
            "importance": "advanced",
        },
    )

    def __post_init__(self) -> None:
        """Validate cleaner names and normalize alias keys.

        Raises
        ------
        ValidationError
            If ``disabled_cleaners`` is not a name or a list of names, a
            disabled cleaner is unknown or an alias is empty.

        """
        if not isinstance(self.disabled_cleaners, (str, list, tuple)) or (
            not isinstance(self.disabled_cleaners, str)
            and not all(isinstance(name, str) for name in self.disabled_cleaners)
        ):
            raise ValidationError(
                "disabled_cleaners must be a cleaner name or a list of cleaner names, "
                f"got {self.disabled_cleaners!r}",
                parameter_name="disabled_cleaners",
                parameter_value=self.disabled_cleaners,
            )

        if isinstance(self.disabled_cleaners, str):
            object.__setattr__(self, "disabled_cleaners", (self.disabled_cleaners,))
        else:
            object.__setattr__(self, "disabled_cleaners", tuple(self.disabled_cleaners))

        unknown = [name for name in self.disabled_cleaners if name not in DEFAULT_CLEANER_ORDER]
        if unknown:
            raise ValidationError(
                f"Unknown cleaner(s): {', '.join(unknown)}. Available: {', '.join(DEFAULT_CLEANER_ORDER)}",
                parameter_name="disabled_cleaners",
                parameter_value=unknown,
            )

        aliases: dict[str, str] = {}
        for source, target in dict(self.language_aliases).items():
            if not isinstance(source, str) or not isinstance(target, str) or not source.strip() or not target.strip():
                raise ValidationError(
                    f"Invalid language alias {source!r} -> {target!r}",
                    parameter_name="language_aliases",
                    parameter_value=(source, target),
                )
            aliases[source.strip().lower()] = target.strip()
        object.__setattr__(self, "language_aliases", aliases)

    @property
    def resolved_language_aliases(self) -> dict[str, str]:
        """Built-in aliases updated with the configured ones."""
        return {**LANGUAGE_ALIASES, **self.language_aliases}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> BBCodeConverterOptions:
        """Build options from a configuration mapping.

        Keys may use dashes or underscores (``disabled-cleaners`` or
        ``disabled_cleaners``).

        Raises
        ------
        ValidationError
            If the mapping contains unknown keys.

        """
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = str(key).replace("-", "_")
            if name not in known:
                raise ValidationError(
                    f"Unknown option '{key}'. Available: {', '.join(sorted(known))}",
                    parameter_name=str(key),
                    parameter_value=value,
                )
            kwargs[name] = value

        if "language_aliases" in kwargs and not isinstance(kwargs["language_aliases"], Mapping):
            raise ValidationError(
                "language_aliases must be a table/mapping",
                parameter_name="language_aliases",
                parameter_value=kwargs["language_aliases"],
            )
        return cls(**kwargs)
