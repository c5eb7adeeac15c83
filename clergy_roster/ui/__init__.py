"""UI module for NiceGUI interface."""

from clergy_roster.ui.clergy_dialog import ClergyDialog
from clergy_roster.ui.org_info_dialog import OrgInfoDialog
from clergy_roster.ui.roster_view import RosterView

__all__ = ["ClergyDialog", "OrgInfoDialog", "RosterView"]
