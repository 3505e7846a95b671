"""React name sets used by the library-layer heuristics.

Detection is purely name based: a call named ``useState`` is treated as the
React hook whether or not it was imported from ``react``, and a custom hook
such as ``useMyData`` is never treated as React. There is no import or binding
resolution.

A JSON override file may adjust any set::

    {
      "hooks": {"extend": ["useFormState"]},
      "types": {"replace": ["FC", "ReactNode"]},
      "namespace": "Preact"
    }
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from tsxlayers.io_utils import load_json


REACT_HOOKS: frozenset[str] = frozenset({
    "useState",
    "useEffect",
    "useContext",
    "useReducer",
    "useCallback",
    "useMemo",
    "useRef",
    "useImperativeHandle",
    "useLayoutEffect",
    "useDebugValue",
    "useDeferredValue",
    "useTransition",
    "useId",
    "useSyncExternalStore",
    "useInsertionEffect",
    "use",  # React 19: use(Promise) / use(Context)
})

REACT_TYPES: frozenset[str] = frozenset({
    # components
    "FC", "FunctionComponent", "ComponentType", "ComponentClass", "ElementType",
    "ExoticComponent", "ForwardRefExoticComponent", "MemoExoticComponent",
    "LazyExoticComponent",
    # elements and nodes
    "ReactNode", "ReactElement", "ReactChild", "ReactFragment", "ReactPortal",
    "ReactText",
    # JSX namespace
    "Element", "IntrinsicElements",
    # props helpers
    "PropsWithChildren", "PropsWithRef", "ComponentProps", "ComponentPropsWithRef",
    "ComponentPropsWithoutRef",
    # HTML/SVG attributes
    "HTMLAttributes", "SVGAttributes", "HTMLProps", "CSSProperties",
    "DOMAttributes", "AriaAttributes",
    # refs
    "Ref", "RefObject", "MutableRefObject", "ForwardedRef", "LegacyRef",
    "RefCallback", "ElementRef", "ComponentRef",
    # events
    "SyntheticEvent", "ChangeEvent", "MouseEvent", "FormEvent", "KeyboardEvent",
    "FocusEvent", "DragEvent", "TouchEvent", "PointerEvent", "WheelEvent",
    "AnimationEvent", "TransitionEvent", "ClipboardEvent", "CompositionEvent",
    "UIEvent",
    # state
    "Dispatch", "SetStateAction", "ReducerState", "ReducerAction",
    # context
    "Context", "Provider", "Consumer",
    # special components
    "Suspense", "SuspenseProps", "StrictMode", "Profiler", "ProfilerProps",
    "Fragment",
    "Key",
})

# Utilities recognised when imported bare (``memo(...)`` rather than ``React.memo(...)``).
REACT_UTILS: frozenset[str] = frozenset({
    "memo",
    "forwardRef",
    "lazy",
    "createContext",
    "createRef",
    "cloneElement",
    "isValidElement",
    "createElement",
    "Children",
    "Fragment",
    "Suspense",
    "StrictMode",
    "Profiler",
})

REACT_JSX_ATTRIBUTES: frozenset[str] = frozenset({"key", "ref"})

# Server Components directives.
REACT_DIRECTIVES: frozenset[str] = frozenset({"use client", "use server"})

_PASCAL_CASE_RE = re.compile(r"^[A-Z][a-zA-Z0-9]*$")

_SET_FIELDS = ("hooks", "types", "utilities", "jsx_attributes", "directives")
_NAME_FIELDS = ("namespace", "markup_namespace")


@dataclass(frozen=True, slots=True)
class LibraryVocabulary:
    """Names that mark a construct as belonging to the UI library."""

    hooks: frozenset[str] = REACT_HOOKS
    types: frozenset[str] = REACT_TYPES
    utilities: frozenset[str] = REACT_UTILS
    jsx_attributes: frozenset[str] = REACT_JSX_ATTRIBUTES
    directives: frozenset[str] = REACT_DIRECTIVES
    namespace: str = "React"
    markup_namespace: str = "JSX"
    element_factory: str = "createElement"

    def __post_init__(self) -> None:
        if not self.namespace.isidentifier():
            raise ValueError(f"namespace must be an identifier, got {self.namespace!r}")
        if not self.markup_namespace.isidentifier():
            raise ValueError(
                f"markup_namespace must be an identifier, got {self.markup_namespace!r}",
            )

    def is_hook_call(self, callee: str) -> bool:
        """True for bare hook names and ``React.use`` / ``React.useXxx``."""
        if callee in self.hooks:
            return True
        prefix = f"{self.namespace}.use"
        if not callee.startswith(prefix):
            return False
        rest = callee[len(prefix):]
        return rest == "" or rest[0].isupper()

    def is_element_factory(self, callee: str) -> bool:
        return callee in (self.element_factory, f"{self.namespace}.{self.element_factory}")

    def is_namespaced(self, name: str) -> bool:
        return name.startswith(f"{self.namespace}.")

    def is_library_type_name(self, name: str) -> bool:
        """Type reference escalation: ``React.*``, ``JSX.*`` or a known type."""
        return (
            name.startswith(f"{self.namespace}.")
            or name.startswith(f"{self.markup_namespace}.")
            or name in self.types
        )


DEFAULT_VOCABULARY = LibraryVocabulary()


def is_pascal_case(name: str) -> bool:
    return bool(_PASCAL_CASE_RE.match(name))


def _coerce_name_set(field_name: str, value: Any, current: frozenset[str]) -> frozenset[str]:
    if isinstance(value, list):
        value = {"replace": value}
    if not isinstance(value, dict):
        raise ValueError(f"{field_name} override must be a list or an object")
    unknown = set(value) - {"extend", "replace", "remove"}
    if unknown:
        raise ValueError(f"{field_name} override has unknown keys: {sorted(unknown)}")
    names = set(current)
    if "replace" in value:
        names = set(_string_list(field_name, value["replace"]))
    names.update(_string_list(field_name, value.get("extend", [])))
    names.difference_update(_string_list(field_name, value.get("remove", [])))
    return frozenset(names)


def _string_list(field_name: str, value: Any) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"{field_name} entries must be a list of strings")
    return value


def vocabulary_from_dict(
    payload: dict[str, Any],
    *,
    base: LibraryVocabulary = DEFAULT_VOCABULARY,
) -> LibraryVocabulary:
    """Apply a JSON-style override payload on top of ``base``."""

    if not isinstance(payload, dict):
        raise ValueError("vocabulary override must be a JSON object")
    unknown = set(payload) - set(_SET_FIELDS) - set(_NAME_FIELDS) - {"element_factory"}
    if unknown:
        raise ValueError(f"unknown vocabulary fields: {sorted(unknown)}")

    changes: dict[str, Any] = {}
    for field_name in _SET_FIELDS:
        if field_name in payload:
            changes[field_name] = _coerce_name_set(
                field_name, payload[field_name], getattr(base, field_name),
            )
    for field_name in (*_NAME_FIELDS, "element_factory"):
        if field_name in payload:
            value = payload[field_name]
            if not isinstance(value, str):
                raise ValueError(f"{field_name} must be a string")
            changes[field_name] = value
    return replace(base, **changes)


def load_vocabulary(path: Path) -> LibraryVocabulary:
    """Load a vocabulary override file."""
    return vocabulary_from_dict(load_json(path))
