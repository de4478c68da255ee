from uuid import UUID

from fastapi import APIRouter, Depends, status

from credcore.api.bootstrap import Services
from credcore.api.error import ClientError, ServerError
from credcore.app.services.unit_of_work import UnitOfWork
from credcore.app.use_cases.auth import AuthContext
from credcore.app.use_cases.institutions import (
    InstitutionInfo,
    InstitutionListResponse,
    LinkInstitutionCommand,
    LinkInstitutionUseCase,
    ListInstitutionsUseCase,
    UnlinkInstitutionUseCase,
)
from credcore.depends import get_current_account, get_services, get_unit_of_work

router = APIRouter(prefix="/institutions", tags=["Institutions"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=InstitutionInfo)
async def link_institution(
    request: LinkInstitutionCommand,
    current_account: AuthContext = Depends(get_current_account),
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: Services = Depends(get_services),
):
    """
    Link an institution.

    The access credential is encrypted before storage and never returned.
    Linking the same item again replaces the stored credential.
    """
    use_case = LinkInstitutionUseCase(uow, services.cipher)
    result = await use_case.execute(current_account.account_id, request)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.get("", status_code=status.HTTP_200_OK, response_model=InstitutionListResponse)
async def list_institutions(
    current_account: AuthContext = Depends(get_current_account),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    use_case = ListInstitutionsUseCase(uow)
    result = await use_case.execute(current_account.account_id)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.delete("/{link_id}", status_code=status.HTTP_200_OK)
async def unlink_institution(
    link_id: UUID,
    current_account: AuthContext = Depends(get_current_account),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    use_case = UnlinkInstitutionUseCase(uow)
    result = await use_case.execute(current_account.account_id, link_id)

    if result.is_err():
        error = result.error
        if error.code == "INSTITUTION_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
