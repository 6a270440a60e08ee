import logging
from typing import Optional

from fastapi import Depends, HTTPException
from starlette import status

from projectdb.lib.authentication import EmployeeData, get_current_user
from projectdb.lib.logging.context import logging_context, save_to_logging_context
from projectdb.models.enums.employee_role import EmployeeRole

logger = logging.getLogger(__name__)


####################################################################################################
# Main authorization methods
####################################################################################################


async def require_current_user(
    user_data: Optional[EmployeeData] = Depends(get_current_user),
) -> EmployeeData:
    if user_data is None:
        logger.info(msg="Non-authenticated user attempted to access protected route.", extra=logging_context())
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        )

    return user_data


def employee_has_role(user_data: Optional[EmployeeData], roles: list[EmployeeRole]) -> bool:
    if user_data is None:
        return False

    return any(role in roles for role in user_data.active_roles)


class RoleRequirer:
    """
    Route-level role gate. Runs after authentication and before any entity is loaded, rejecting employees whose role
    may never perform the operation.
    """

    def __init__(self, roles: list[EmployeeRole]):
        self.roles = roles

    async def __call__(self, user_data: EmployeeData = Depends(require_current_user)) -> EmployeeData:
        save_to_logging_context({"required_roles": [role.name for role in self.roles]})
        if not employee_has_role(user_data, self.roles):
            logger.info(
                msg="User attempted to access role protected route without a required role.", extra=logging_context()
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You are not authorized to use this feature",
            )

        return user_data


require_admin = RoleRequirer([EmployeeRole.admin])
require_manager = RoleRequirer([EmployeeRole.manager, EmployeeRole.admin])
