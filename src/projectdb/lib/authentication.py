import logging
import os
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from projectdb import deps
from projectdb.lib.logging.context import format_raised_exception_info_as_dict, logging_context, save_to_logging_context
from projectdb.models.employee import Employee
from projectdb.models.enums.employee_role import EmployeeRole

JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "change-me")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60))

logger = logging.getLogger(__name__)

password_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


class AuthenticationMethod(str, Enum):
    jwt = "jwt"


@dataclass
class EmployeeData:
    employee: Employee
    active_roles: list[EmployeeRole]


####################################################################################################
# Passwords
####################################################################################################


def hash_password(password: str) -> str:
    return password_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return password_context.verify(password, password_hash)


def authenticate_employee(db: Session, username: str, password: str) -> Optional[Employee]:
    """
    Look up the employee called *username* and check *password* against their stored hash.

    Returns None for an unknown username or a wrong password, so callers cannot tell the two apart.
    """
    employee = db.query(Employee).filter(Employee.username == username).one_or_none()
    if employee is None:
        logger.info(msg="Failed to sign in employee; No employee has this username.", extra=logging_context())
        return None

    save_to_logging_context({"employee": employee.id})
    if not verify_password(password, employee.password_hash):
        logger.info(msg="Failed to sign in employee; Incorrect password.", extra=logging_context())
        return None

    return employee


####################################################################################################
# JWT authentication
####################################################################################################


def create_access_token(username: str, expires_delta: Optional[timedelta] = None) -> str:
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    return jwt.encode({"sub": username, "exp": expire}, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)


def decode_jwt(token: str) -> dict:
    try:
        return jwt.decode(token, JWT_SECRET_KEY, algorithms=[JWT_ALGORITHM])
    except JWTError as ex:
        save_to_logging_context(format_raised_exception_info_as_dict(ex))
        logger.debug(msg="Failed to authenticate employee; Could not decode token.", extra=logging_context())
        return {}


class JWTBearer(HTTPBearer):
    def __init__(self, auto_error: bool = True):
        super(JWTBearer, self).__init__(auto_error=auto_error)

    async def __call__(self, request: Request):
        credentials: Optional[HTTPAuthorizationCredentials]
        try:
            credentials = await super(JWTBearer, self).__call__(request)
        except HTTPException:
            credentials = None

        if credentials:
            if not credentials.scheme == "Bearer":
                save_to_logging_context({"scheme": credentials.scheme})
                logger.info(
                    msg="Failed to authenticate employee; Invalid authentication scheme.", extra=logging_context()
                )
                return None

            token_payload = self.verify_jwt(credentials.credentials)

            if not token_payload:
                logger.info(msg="Failed to authenticate employee; Invalid or expired token.", extra=logging_context())
                return None

            logger.debug(msg="Successfully acquired JWT.", extra=logging_context())
            return token_payload

        else:
            logger.debug(msg="Failed to authenticate employee; No credentials were provided.", extra=logging_context())
            return None

    @staticmethod
    def verify_jwt(token: str) -> dict:
        return decode_jwt(token)


####################################################################################################
# Main authentication methods
####################################################################################################


async def get_current_user(
    token_payload: Optional[dict] = Depends(JWTBearer()),
    db: Session = Depends(deps.get_db),
) -> Optional[EmployeeData]:
    if token_payload is None:
        save_to_logging_context({"auth_method": None, "user_authenticated": False})
        logger.info(msg="Failed to authenticate employee; Could not acquire credentials.", extra=logging_context())
        return None

    save_to_logging_context({"auth_method": AuthenticationMethod.jwt})

    username: Optional[str] = token_payload.get("sub")
    if username is None:
        save_to_logging_context({"user_authenticated": False})
        logger.info(
            msg="Failed to authenticate employee; Username not present in token payload.", extra=logging_context()
        )
        return None

    employee = db.query(Employee).filter(Employee.username == username).one_or_none()
    if employee is None:
        save_to_logging_context({"user_authenticated": False})
        logger.info(msg="Failed to authenticate employee; Employee no longer exists.", extra=logging_context())
        return None

    save_to_logging_context(
        {
            "user": employee.id,
            "user_authenticated": True,
            "active_roles": [role.name for role in employee.roles],
        }
    )
    logger.info(msg="Successfully authenticated employee via JWT.", extra=logging_context())
    return EmployeeData(employee, employee.roles)
