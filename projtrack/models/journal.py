import calendar
from datetime import datetime
from sqlalchemy import inspect
from sqlalchemy.orm import object_session
from sqlalchemy.orm.attributes import set_committed_value
from ..extensions import db
from .types import ChangeSet, utcnow


def _to_int(value):
    if value is None:
        return 0
    if isinstance(value, datetime):
        return calendar.timegm(value.utctimetuple())
    return int(value)


class Journal(db.Model):
    """
    One historical version of a journaled object (issue, wiki page, project).

    Entries are append-only. The owning object is referenced by
    ``journaled_type`` (its class name) and ``journaled_id``.
    """

    id = db.Column(db.Integer, primary_key=True)
    journaled_id = db.Column(db.Integer, nullable=False)
    journaled_type = db.Column(db.String(64), nullable=False)
    version = db.Column(db.Integer, nullable=False)
    # Column is named "changes"; the attribute isn't, so that ``changes``
    # can stay the legacy alias of ``details``.
    change_set = db.Column("changes", ChangeSet)
    notes = db.Column(db.Text)
    user_id = db.Column(db.Integer, db.ForeignKey("user.id"), index=True)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False, index=True)

    user = db.relationship("User")

    __table_args__ = (
        db.UniqueConstraint("version", "journaled_id", "journaled_type", name="uq_journal_version"),
        db.Index("ix_journal_journaled", "journaled_id", "journaled_type"),
    )

    # Journaled classes by name, filled in as they are mapped
    journaled_classes = {}

    _journaled = None

    def __repr__(self):
        return f"<Journal {self.journaled_type}#{self.journaled_id} v{self.version}>"

    @classmethod
    def changing(cls):
        """All journals except initial ones, e.g. for a change log."""
        return cls.query.filter(cls.version > 1)

    def _resolve_journaled(self):
        if self._journaled is None and self.journaled_type is not None:
            journaled_class = self.journaled_classes.get(self.journaled_type)
            session = object_session(self)
            if journaled_class is not None and session is not None:
                with session.no_autoflush:
                    self._journaled = session.get(journaled_class, self.journaled_id)
        return self._journaled

    @property
    def journaled(self):
        return self._resolve_journaled()

    @journaled.setter
    def journaled(self, value):
        from .journaled import Journaled

        if not isinstance(value, Journaled):
            raise TypeError(f"{type(value).__name__} is not journaled")
        # the "append" listener on ``journals`` sets journaled_type and the cache
        value.journals.append(self)

    def touch_journaled_after_creation(self, connection):
        journaled = self._resolve_journaled()
        if journaled is None:
            return

        # strip microseconds, the touch is second precision
        current_time = self.created_at.replace(microsecond=0)

        # loaded values only; an expired column is always rewritten
        loaded = inspect(journaled).dict
        changes = {}
        for attribute in journaled.timestamp_columns():
            if loaded.get(attribute) == current_time:
                continue
            # write the new timestamp without marking the object dirty
            set_committed_value(journaled, attribute, current_time)
            changes[attribute] = current_time

        if not changes:
            return

        type(journaled).update_columns_silently(connection, self.journaled_id, changes)

    def compare(self, other):
        """Three-way comparison on (version, created_at, id)."""
        mine = [_to_int(v) for v in (self.version, self.created_at, self.id)]
        theirs = [_to_int(v) for v in (other.version, other.created_at, other.id)]
        return (mine > theirs) - (mine < theirs)

    def __lt__(self, other):
        if not isinstance(other, Journal):
            return NotImplemented
        return self.compare(other) < 0

    @property
    def is_initial(self):
        """Initial versions carry no change-set."""
        return self.version < 2

    @property
    def anchor(self):
        """Anchor number for HTML output, starting at 0."""
        return self.version - 1

    @property
    def project(self):
        from .project import Project

        journaled = self.journaled
        if hasattr(journaled, "project"):
            return journaled.project
        elif isinstance(journaled, Project):
            return journaled
        return None

    def editable_by(self, user):
        journaled = self.journaled
        if journaled is None:
            return False
        return journaled.journal_editable_by(user)

    @property
    def details(self):
        return self.change_set or {}

    @property
    def changes(self):
        return self.details

    @changes.setter
    def changes(self, value):
        self.change_set = value

    def new_value_for(self, field):
        pair = self.details.get(str(field))
        return pair[-1] if pair is not None else None

    def old_value_for(self, field):
        pair = self.details.get(str(field))
        return pair[0] if pair is not None else None

    @property
    def css_classes(self):
        classes = ["journal"]
        if self.notes and self.notes.strip():
            classes.append("has-notes")
        if self.details:
            classes.append("has-details")
        return " ".join(classes)

    def __getattr__(self, name):
        # Only called when normal lookup fails. Lets callers read e.g.
        # ``journal.subject`` off an issue journal; the journaled class
        # lists what may be read this way in __journal_delegates__.
        if name.startswith("_"):
            raise AttributeError(name)
        if any(name in vars(klass) for klass in type(self).__mro__):
            # one of our own properties failed; surface its error
            return object.__getattribute__(self, name)
        missing = AttributeError(
            f"{type(self).__name__!r} object has no attribute {name!r}", name=name, obj=self
        )
        journaled = self._resolve_journaled()
        if journaled is None or name not in getattr(journaled, "__journal_delegates__", ()):
            raise missing
        try:
            return getattr(journaled, name)
        except AttributeError as e:
            if e.name == name and e.obj is journaled:
                raise missing from None
            raise
