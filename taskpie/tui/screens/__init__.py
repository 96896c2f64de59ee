"""TUI screens for taskpie."""

from .modals import ConfirmModal, HelpModal, UnsavedEditsModal

__all__ = ["ConfirmModal", "HelpModal", "UnsavedEditsModal"]
