from sqlalchemy import and_, event, inspect, update
from sqlalchemy.orm import foreign, relationship, remote
from sqlalchemy.orm.attributes import flag_dirty

TIMESTAMP_COLUMNS = ("updated_at", "updated_on")


class Journaled:
    """
    Mixin for models whose history is recorded as Journal rows.

    Subclasses declare which columns are recorded (``__journaled_fields__``),
    which attributes a Journal may read through to them
    (``__journal_delegates__``) and who may edit their journals
    (``journal_editable_by``).
    """

    __journaled_fields__ = ()
    __journal_delegates__ = ()

    # pending journal data, consumed by the before_flush listener
    _journal_user = None
    _journal_notes = None
    _journal_originals = None

    def init_journal(self, user=None, notes=None):
        """Sets the author and notes of the journal written on the next flush."""
        self._journal_user = user
        self._journal_notes = notes
        # a notes-only journal still needs a flush
        flag_dirty(self)
        return self

    def journal_editable_by(self, user):
        return bool(user is not None and getattr(user, "admin", False))

    @property
    def last_journal(self):
        return self.journals[-1] if self.journals else None

    @classmethod
    def timestamp_columns(cls):
        columns = cls.__table__.columns.keys()
        return [c for c in TIMESTAMP_COLUMNS if c in columns]

    @classmethod
    def update_columns_silently(cls, connection, pk, values):
        """
        Writes ``values`` straight to the row with primary key ``pk``.

        Goes through Core, not the ORM: no mapper events, no dirty tracking
        and therefore no journal for the write.
        """
        pk_column = inspect(cls).primary_key[0]
        connection.execute(update(cls.__table__).where(pk_column == pk).values(**values))


def _original_recorder(field):
    def remember_original(target, value, oldvalue, initiator):
        if not inspect(target).persistent:
            return
        if target._journal_originals is None:
            target._journal_originals = {}
        target._journal_originals.setdefault(field, oldvalue)
    return remember_original


@event.listens_for(Journaled, "mapper_configured", propagate=True)
def setup_journals(mapper, class_):
    from .journal import Journal

    name = class_.__name__
    Journal.journaled_classes[name] = class_

    class_.journals = relationship(
        Journal,
        primaryjoin=and_(
            class_.id == foreign(remote(Journal.journaled_id)),
            Journal.journaled_type == name,
        ),
        order_by=Journal.version,
        cascade="all, delete-orphan",
        overlaps="journals",
    )

    @event.listens_for(class_.journals, "append")
    def append_journal(target, value, initiator):
        value.journaled_type = name
        value._journaled = target

    # active_history loads the old value even when it was expired
    for field in class_.__journaled_fields__:
        event.listen(getattr(class_, field), "set", _original_recorder(field), active_history=True)
