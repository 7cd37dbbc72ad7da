"""Ordered pattern table used to spot stylesheet features line by line."""

from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class StylesheetRule:
    """One detection rule: where it matches, which feature it signals."""

    pattern: re.Pattern[str]
    key: str
    property: str
    value: str | None = None


def _rule(pattern: str, key: str, property: str, value: str | None = None) -> StylesheetRule:
    return StylesheetRule(re.compile(pattern, re.IGNORECASE), key, property, value)


# Rules are evaluated independently and in order; one line may match many.
STYLESHEET_RULES: tuple[StylesheetRule, ...] = (
    # Layout
    _rule(r"\bgrid\b(?!-)", "grid", "grid"),
    _rule(r"display:\s*grid", "grid", "display", "grid"),
    _rule(r"display:\s*flex", "flexbox", "display", "flex"),
    _rule(r"display:\s*contents", "display-contents", "display", "contents"),
    _rule(r"grid-template-columns", "grid", "grid-template-columns"),
    _rule(r"grid-template-rows", "grid", "grid-template-rows"),
    _rule(r"grid-template-areas", "grid", "grid-template-areas"),
    _rule(r"grid-auto-flow", "grid", "grid-auto-flow"),
    _rule(r"subgrid", "subgrid", "subgrid"),
    _rule(r"flex-direction", "flexbox", "flex-direction"),
    _rule(r"justify-content", "flexbox", "justify-content"),
    _rule(r"align-items", "flexbox", "align-items"),
    _rule(r"flex-wrap", "flexbox", "flex-wrap"),
    _rule(r"position:\s*sticky", "sticky-positioning", "position", "sticky"),
    _rule(r"anchor-name", "anchor-positioning", "anchor-name"),
    _rule(r"position-anchor", "anchor-positioning", "position-anchor"),
    # Box and spacing
    _rule(r"\bgap:", "flexbox-gap", "gap"),
    _rule(r"aspect-ratio:", "aspect-ratio", "aspect-ratio"),
    _rule(r"margin-inline", "logical-properties", "margin-inline"),
    _rule(r"padding-block", "logical-properties", "padding-block"),
    _rule(r"border-inline", "logical-properties", "border-inline"),
    _rule(r"inset-inline", "logical-properties", "inset-inline"),
    _rule(r"box-sizing", "box-sizing", "box-sizing"),
    # Visual effects
    _rule(r"transform:", "transforms2d", "transform"),
    _rule(r"transform-style", "transforms3d", "transform-style"),
    _rule(r"transform-origin", "transforms2d", "transform-origin"),
    _rule(r"perspective", "transforms3d", "perspective"),
    _rule(r"rotate3d|rotateX|rotateY|rotateZ|translate3d", "transforms3d", "3d-transforms"),
    _rule(r"filter:", "filter", "filter"),
    _rule(r"backdrop-filter:", "backdrop-filter", "backdrop-filter"),
    _rule(r"linear-gradient", "gradients", "linear-gradient"),
    _rule(r"radial-gradient", "gradients", "radial-gradient"),
    _rule(r"conic-gradient", "conic-gradients", "conic-gradient"),
    _rule(r"mix-blend-mode", "mix-blend-mode", "mix-blend-mode"),
    _rule(r"appearance", "appearance", "appearance"),
    # Motion and animation
    _rule(r"transition:", "transitions", "transition"),
    _rule(r"transition-property", "transitions", "transition-property"),
    _rule(r"transition-duration", "transitions", "transition-duration"),
    _rule(r"animation:", "animations-css", "animation"),
    _rule(r"animation-composition", "animation-composition", "animation-composition"),
    _rule(r"offset-path", "motion-path", "offset-path"),
    _rule(r"offset-distance", "motion-path", "offset-distance"),
    _rule(r"offset-rotate", "motion-path", "offset-rotate"),
    _rule(r"view-transition-name", "view-transitions", "view-transition-name"),
    # Custom properties
    _rule(r"--[a-zA-Z-]+:", "custom-properties", "custom-properties"),
    _rule(r"var\(", "custom-properties", "var()"),
    # Math functions
    _rule(r"calc\(", "calc", "calc()"),
    _rule(r"\bmin\(", "min-max-clamp", "min()"),
    _rule(r"\bmax\(", "min-max-clamp", "max()"),
    _rule(r"clamp\(", "min-max-clamp", "clamp()"),
    # Color functions
    _rule(r"\bhsl\(", "hsl", "hsl()"),
    _rule(r"\bhwb\(", "hwb", "hwb()"),
    _rule(r"\blab\(", "lab", "lab()"),
    _rule(r"\blch\(", "lab", "lch()"),
    _rule(r"color-mix\(", "color-mix", "color-mix()"),
    _rule(r"\bcolor\(", "color-function", "color()"),
    # Containment and queries
    _rule(r"contain:", "contain", "contain"),
    _rule(r"content-visibility", "content-visibility", "content-visibility"),
    _rule(r"contain-intrinsic-size", "contain-intrinsic-size", "contain-intrinsic-size"),
    _rule(r"container-type:", "container-queries", "container-type"),
    _rule(r"container-name:", "container-queries", "container-name"),
    _rule(r"@container", "container-queries", "@container"),
    # Cascade layers
    _rule(r"@layer", "cascade-layers", "@layer"),
    # Nesting
    _rule(r"&:", "nesting", "nesting"),
    _rule(r"&\s*\.", "nesting", "nesting"),
    # Scroll behavior
    _rule(r"scroll-snap-type", "scroll-snap", "scroll-snap-type"),
    _rule(r"scroll-behavior", "scroll-behavior", "scroll-behavior"),
    _rule(r"scroll-padding", "scroll-snap", "scroll-padding"),
    _rule(r"scroll-margin", "scroll-snap", "scroll-margin"),
    _rule(r"overscroll-behavior", "overscroll-behavior", "overscroll-behavior"),
    _rule(r"overflow-anchor", "scroll-anchoring", "overflow-anchor"),
    # Text and font features
    _rule(r"text-wrap", "text-wrap", "text-wrap"),
    _rule(r"hyphens", "hyphens", "hyphens"),
    _rule(r"text-decoration-thickness", "text-decoration", "text-decoration-thickness"),
    _rule(r"text-underline-offset", "text-decoration", "text-underline-offset"),
    _rule(r"text-emphasis", "text-emphasis", "text-emphasis"),
    _rule(r"font-display", "font-display", "font-display"),
    _rule(r"font-palette", "font-palette", "font-palette"),
    _rule(r"font-variation-settings", "font-variation-settings", "font-variation-settings"),
    _rule(r"font-optical-sizing", "font-optical-sizing", "font-optical-sizing"),
    # Interaction
    _rule(r"user-select", "user-select", "user-select"),
    _rule(r"pointer-events", "pointer-events", "pointer-events"),
    _rule(r"resize:", "resize", "resize"),
    _rule(r"caret-color", "caret-color", "caret-color"),
    _rule(r"accent-color", "accent-color", "accent-color"),
    # Scrollbars
    _rule(r"scrollbar-width", "scrollbar-width", "scrollbar-width"),
    _rule(r"scrollbar-color", "scrollbar-color", "scrollbar-color"),
    _rule(r"scrollbar-gutter", "scrollbar-gutter", "scrollbar-gutter"),
    # Masks and shapes
    _rule(r"\bmask:", "masks", "mask"),
    _rule(r"shape-outside", "shapes", "shape-outside"),
    _rule(r"shape-margin", "shapes", "shape-margin"),
    _rule(r"clip-path", "clip-path", "clip-path"),
    # Viewport units
    _rule(r"\d+vw", "viewport-units", "vw"),
    _rule(r"\d+vh", "viewport-units", "vh"),
    _rule(r"\d+svh", "viewport-unit-variants", "svh"),
    _rule(r"\d+lvh", "viewport-unit-variants", "lvh"),
    _rule(r"\d+dvh", "viewport-unit-variants", "dvh"),
    # At-rules
    _rule(r"@keyframes", "animations-css", "@keyframes"),
    _rule(r"@supports", "supports", "@supports"),
    _rule(r"@media", "media-queries", "@media"),
    _rule(r"@import", "import", "@import"),
    _rule(r"@font-face", "font-face", "@font-face"),
    _rule(r"@font-palette-values", "font-palette", "@font-palette-values"),
    _rule(r"@counter-style", "counter-style", "@counter-style"),
    _rule(r"@page", "page-breaks", "@page"),
    _rule(r"@property", "registered-custom-properties", "@property"),
    _rule(r"@scope", "scope", "@scope"),
    _rule(r"@starting-style", "starting-style", "@starting-style"),
    # Structural pseudo-classes
    _rule(r":has\(", "has", ":has()"),
    _rule(r":is\(", "is", ":is()"),
    _rule(r":where\(", "where", ":where()"),
    _rule(r":not\(", "not", ":not()"),
    _rule(r":focus-visible", "focus-visible", ":focus-visible"),
    _rule(r":focus-within", "focus-within", ":focus-within"),
    # Pseudo-elements
    _rule(r"::marker", "marker", "::marker"),
    _rule(r"::selection", "selection", "::selection"),
    _rule(r"::placeholder", "placeholder", "::placeholder"),
    _rule(r"::backdrop", "backdrop", "::backdrop"),
    _rule(r"::first-letter", "first-letter", "::first-letter"),
    _rule(r"::first-line", "first-line", "::first-line"),
    # Media-query features
    _rule(r"prefers-color-scheme", "prefers-color-scheme", "prefers-color-scheme"),
    _rule(r"prefers-reduced-motion", "prefers-reduced-motion", "prefers-reduced-motion"),
    _rule(r"prefers-contrast", "prefers-contrast", "prefers-contrast"),
    _rule(r"color-gamut", "color-gamut", "color-gamut"),
    _rule(r"\bscripting\b", "scripting", "scripting"),
)
