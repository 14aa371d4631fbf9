"""Fine-management backend payload schemas."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class FineReference(BaseModel):
    """A payable fine and its owner, as returned by the fine backend."""

    model_config = ConfigDict(
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="ignore",
    )

    fine_id: str | None = Field(default=None, alias="fineId")
    civil_nic: str = Field(alias="civilNIC")
    fine_management_id: str = Field(alias="fineManagementId", min_length=1)


class FineReferenceEnvelope(BaseModel):
    """``GET /policeIssueFine/{fineId}`` response body."""

    data: FineReference


class FineAmount(BaseModel):
    """Fine amount in the local currency.

    Left as an unconstrained ``Decimal`` here; range checks happen in the
    backend client so that a bad value surfaces as ``AmountValidationError``.
    """

    model_config = ConfigDict(extra="ignore")

    fine: Decimal = Field(allow_inf_nan=True)


class FineAmountEnvelope(BaseModel):
    """``GET /fine/{fineManagementId}`` response body."""

    data: FineAmount
