"""Chapter list output."""

from .formatter import check_platform_rules, render, render_marker_text

__all__ = ['render', 'render_marker_text', 'check_platform_rules']
