"""Session state for the explain screen."""

from solvelt.session.state import ExplainSession, Phase, SessionState

__all__ = ["ExplainSession", "Phase", "SessionState"]
