import pytest
from projtrack.app import create_app
from projtrack.extensions import db
from projtrack.models import Issue, Project, User


@pytest.fixture(scope='session')
def app():
    """Session-wide test `Flask` application."""
    app = create_app("testing")
    app.config.update({
        "SERVER_NAME": "localhost",
    })

    with app.app_context():
        db.create_all()
        yield app
        db.drop_all()


@pytest.fixture(scope='function')
def db_session(app, clean_db):
    """Yields a database session for a test, wrapped in an app context."""
    with app.app_context():
        yield db.session


@pytest.fixture(scope='function')
def clean_db(app):
    """Ensures the database is clean before each test runs."""
    with app.app_context():
        # a test may leave the session in a failed transaction
        db.session.rollback()
        # A fast way to clear all data from all tables
        for table in reversed(db.metadata.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()


@pytest.fixture
def user(db_session):
    user = User(login="jsmith", email="jsmith@example.com")
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture
def other_user(db_session):
    user = User(login="dlopper", email="dlopper@example.com")
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture
def admin(db_session):
    user = User(login="admin", email="admin@example.com", admin=True)
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture
def project(db_session, user):
    project = Project(name="eCookbook", identifier="ecookbook", owner=user)
    db_session.add(project)
    db_session.commit()
    return project


@pytest.fixture
def issue(db_session, project, other_user):
    issue = Issue(project=project, author=other_user, subject="Old")
    db_session.add(issue)
    db_session.commit()
    return issue
