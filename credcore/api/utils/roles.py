"""
Role Guards

Dependencies restricting routes to accounts of a given role.
"""

from fastapi import Depends, status

from credcore.api.error import ClientError
from credcore.app.use_cases.auth import AuthContext
from credcore.depends import get_current_account
from credcore.domain.entities import AccountRole
from credcore.libs.result import Error


def require_role(*roles):
    """
    Build a dependency that admits only the given roles.

    Usage:
        @router.get("/reports", dependencies=[Depends(require_role("admin"))])

    Raises:
        ClientError: 401 when unauthenticated, 403 when the role is not allowed
    """
    allowed = {role.value if isinstance(role, AccountRole) else role for role in roles}

    async def dependency(context: AuthContext = Depends(get_current_account)) -> AuthContext:
        if context.role not in allowed:
            raise ClientError(
                Error("FORBIDDEN", "Insufficient permissions"),
                status_code=status.HTTP_403_FORBIDDEN,
            )
        return context

    return dependency


require_premium = require_role(AccountRole.premium, AccountRole.admin)
