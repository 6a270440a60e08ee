import logging

from sqlalchemy.orm import Session

from projectdb.lib.logging.context import logging_context, save_to_logging_context
from projectdb.models.employee import Employee
from projectdb.models.enums.status import ProjectStatus
from projectdb.models.project import Project
from projectdb.view_models import project as project_vm

logger = logging.getLogger(__name__)


def create_project(db: Session, manager: Employee, item_create: project_vm.ProjectCreate) -> Project:
    """
    Create a project owned by *manager*. New projects are always in progress.
    """
    item = Project(
        title=item_create.title,
        body=item_create.body or "",
        status=ProjectStatus.in_progress,
        manager=manager,
    )
    db.add(item)
    db.commit()
    db.refresh(item)

    save_to_logging_context({"created_resource": item.id, "manager": manager.id})
    logger.info(msg="Created project.", extra=logging_context())
    return item


def modify_project(db: Session, item: Project, item_update: project_vm.ProjectModify) -> Project:
    item.title = item_update.title
    item.body = item_update.body or ""

    db.add(item)
    db.commit()
    db.refresh(item)
    return item


def set_project_status(db: Session, item: Project, status: ProjectStatus) -> Project:
    """
    Move *item* to *status*. Any status may follow any other.
    """
    save_to_logging_context({"previous_status": item.status.name, "new_status": status.name})
    item.status = status

    db.add(item)
    db.commit()
    db.refresh(item)
    return item


def delete_project(db: Session, item: Project) -> None:
    """
    Delete *item* together with its tasks and everything recorded against them.
    """
    save_to_logging_context({"deleted_resource": item.id, "deleted_task_count": len(item.tasks)})
    db.delete(item)
    db.commit()

    logger.info(msg="Deleted project.", extra=logging_context())
