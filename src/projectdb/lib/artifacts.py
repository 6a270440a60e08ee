import logging

from projectdb.lib.exceptions import CrossTaskAssignmentError, UpdateAlreadyAssignedError
from projectdb.lib.logging.context import logging_context, save_to_logging_context
from projectdb.models.artifact import Artifact
from projectdb.models.update import Update

logger = logging.getLogger(__name__)


def assign_update(artifact: Artifact, update: Update) -> Artifact:
    """
    Link *update* to *artifact* as its proof.

    The update must have been posted to the artifact's own task, and may not already be the proof of a different
    artifact. Assigning the update an artifact already holds changes nothing. Any update previously assigned to the
    artifact is replaced.

    Raises:
        CrossTaskAssignmentError: If the update belongs to another task.
        UpdateAlreadyAssignedError: If the update is linked to another artifact.
    """
    save_to_logging_context({"artifact": artifact.id, "assigned_update": update.id})

    if update.task.id != artifact.task.id:
        logger.info(msg="Refused to assign update; The update belongs to another task.", extra=logging_context())
        raise CrossTaskAssignmentError(
            f"Update {update.id} does not belong to the task of artifact {artifact.id} and may not be assigned to it."
        )

    if update.artifact is not None and update.artifact is not artifact:
        logger.info(msg="Refused to assign update; The update is assigned to another artifact.", extra=logging_context())
        raise UpdateAlreadyAssignedError(f"Update {update.id} is already assigned to artifact {update.artifact.id}.")

    artifact.update = update
    logger.debug(msg="Assigned update to artifact.", extra=logging_context())
    return artifact


def unassign_update(artifact: Artifact) -> Artifact:
    """
    Remove whichever update is linked to *artifact*. Unassigning an artifact without an update is not an error.
    """
    save_to_logging_context({"artifact": artifact.id})

    if artifact.update is None:
        logger.debug(msg="Artifact has no assigned update; Nothing to unassign.", extra=logging_context())
        return artifact

    save_to_logging_context({"unassigned_update": artifact.update.id})
    artifact.update = None
    logger.debug(msg="Unassigned update from artifact.", extra=logging_context())
    return artifact
