"""
Environment setup for scripts.
"""

import enum
import logging
from functools import wraps

import click
from sqlalchemy.orm import configure_mappers

from projectdb import deps
from projectdb.models import *  # noqa: F403

logger = logging.getLogger(__name__)


@enum.unique
class DatabaseSessionAction(enum.Enum):
    """
    Enum representing the database session transaction action selected for a
    command decorated by :py:func:`.with_database_session`.
    """

    DRY_RUN = "rollback"
    PROMPT = "prompt"
    COMMIT = "commit"


# Scan all our model classes and create backref attributes. Otherwise, these attributes only get added to classes once
# an instance of the related class has been created.
configure_mappers()


def with_database_session(command=None):
    """
    Decorator to provide database session and error handling for a *command*.

    The *command* callable must be a :py:class:`click.Command` instance.

    The decorated *command* is called with a ``db`` keyword argument holding a
    :class:`~sqlalchemy.orm.Session`. The call happens within an exception
    handler that commits or rolls back the database transaction, possibly
    interactively. Three new options are added to the *command*
    (``--dry-run``, ``--prompt``, and ``--commit``) to control this behaviour.

    >>> @click.command
    ... @with_database_session
    ... def cmd(db: Session):
    ...     pass
    """

    def decorator(command):
        @click.option(
            "--dry-run",
            "action",
            help="Only go through the motions of changing the database (default)",
            flag_value=DatabaseSessionAction("rollback"),
            type=DatabaseSessionAction,
            default=True,
        )
        @click.option(
            "--prompt",
            "action",
            help="Ask if changes to the database should be saved",
            flag_value=DatabaseSessionAction("prompt"),
            type=DatabaseSessionAction,
        )
        @click.option(
            "--commit",
            "action",
            help="Save changes to the database",
            flag_value=DatabaseSessionAction("commit"),
            type=DatabaseSessionAction,
        )
        @wraps(command)
        def decorated(*args, action, **kwargs):
            db = next(deps.get_db())

            kwargs["db"] = db

            processed_without_error = None

            try:
                command(*args, **kwargs)

            except Exception as error:
                processed_without_error = False

                logger.error(f"Aborting with error: {error}")
                raise error from None

            else:
                processed_without_error = True

            finally:
                if action is DatabaseSessionAction.PROMPT:
                    ask_to_commit = (
                        "Commit all changes?"
                        if processed_without_error
                        else "Commit successfully processed records up to this point?"
                    )

                    commit = click.confirm(ask_to_commit)
                else:
                    commit = action is DatabaseSessionAction.COMMIT

                if commit:
                    logger.info(
                        "Committing all changes"
                        if processed_without_error
                        else "Committing successfully processed records up to this point"
                    )
                    db.commit()

                else:
                    logger.info("Rolling back all changes; the database will not be modified")
                    db.rollback()

                db.close()

        return decorated

    return decorator(command) if command else decorator
