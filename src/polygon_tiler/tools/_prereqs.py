"""Prerequisite checking helpers for MCP tools."""


def require_state(state, *, subject: bool = False, clip_shape: bool = False,
                  result: bool = False) -> None:
    """Raise ValueError with a descriptive message if required state is not set.

    Usage in a tool:
        try:
            require_state(state, subject=True)
        except ValueError as e:
            return f"Error: {e}"
    """
    if subject and not state.subject:
        raise ValueError(
            "Set a subject polygon first with set_subject_polygon or set_subject_regular_polygon."
        )
    if clip_shape and state.clip_shape is None:
        raise ValueError(
            "Set a clip shape first with set_clip_shape or set_regular_clip_shape."
        )
    if result and (state.result is None or not state.result.fragments):
        raise ValueError(
            "No fragments yet. Run tile_by_grid or tile_by_shape first."
        )
