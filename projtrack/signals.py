import logging

from flask import has_request_context
from flask_login import current_user
from sqlalchemy import event, inspect
from sqlalchemy.orm import Session

from .models.journal import Journal
from .models.journaled import Journaled
from .models.types import utcnow

logger = logging.getLogger(__name__)


def journal_author(obj):
    """The user set with init_journal, else the logged-in user, if any."""
    if obj._journal_user is not None:
        return obj._journal_user
    if has_request_context() and current_user.is_authenticated:
        return current_user._get_current_object()
    return None


def changed_fields(obj):
    changes = {}
    for field, old in (obj._journal_originals or {}).items():
        new = getattr(obj, field)
        if old != new:
            changes[field] = [old, new]
    return changes


def clear_pending_journal(obj):
    obj._journal_user = obj._journal_notes = obj._journal_originals = None


def write_journal(session, obj, version, changes):
    journal = Journal(
        version=version,
        changes=changes,
        notes=obj._journal_notes,
        user=journal_author(obj),
        created_at=utcnow(),
    )
    obj.journals.append(journal)
    session.add(journal)
    clear_pending_journal(obj)
    logger.debug(
        "Journal v%s for %s: %s",
        version,
        type(obj).__name__,
        ", ".join(sorted(changes)) or "no field changes",
    )
    return journal


@event.listens_for(Session, "before_flush")
def journal_changes(session, flush_context, instances):
    for obj in list(session.new):
        if isinstance(obj, Journaled) and not obj.journals:
            write_journal(session, obj, 1, {})

    for obj in list(session.dirty):
        if not isinstance(obj, Journaled) or obj in session.deleted:
            continue
        if not inspect(obj).persistent:
            continue
        changes = changed_fields(obj)
        if not changes and not obj._journal_notes:
            clear_pending_journal(obj)
            continue
        version = max((j.version for j in obj.journals), default=0) + 1
        write_journal(session, obj, version, changes)


@event.listens_for(Journal, "after_insert")
def touch_journaled(mapper, connection, target):
    target.touch_journaled_after_creation(connection)
