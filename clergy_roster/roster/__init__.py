"""Roster package - sync, filtering, editing and workflows, independent of the UI."""

from clergy_roster.roster.autosave import AutosaveSession, Debouncer, SaveEvent, SaveStatus, transition
from clergy_roster.roster.editor import ClergyEditor, EditorMode
from clergy_roster.roster.filters import FILTER_ALL, RosterFilter, filter_roster
from clergy_roster.roster.notices import Notice, NoticeBoard, NoticeKind
from clergy_roster.roster.org_info import OrgInfoPanel
from clergy_roster.roster.session import AuthSession, check_credentials
from clergy_roster.roster.sync import ConnectionStatus, RosterSync
from clergy_roster.roster.workflows import DeletionWorkflow, StatusChangeWorkflow

__all__ = [
    "AutosaveSession",
    "Debouncer",
    "SaveEvent",
    "SaveStatus",
    "transition",
    "ClergyEditor",
    "EditorMode",
    "FILTER_ALL",
    "RosterFilter",
    "filter_roster",
    "Notice",
    "NoticeBoard",
    "NoticeKind",
    "OrgInfoPanel",
    "AuthSession",
    "check_credentials",
    "ConnectionStatus",
    "RosterSync",
    "DeletionWorkflow",
    "StatusChangeWorkflow",
]
