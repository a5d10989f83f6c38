"""
Pure validation functions for engine inputs.

Each function accepts a dict or a record and returns a ValidationResult
instead of raising, so callers can report every violation at once.
"""
from dataclasses import dataclass, field
from typing import Any, Generic, Optional, TypeVar

from pydantic import ValidationError

from fleetsim.core.exceptions import SimulationValidationError, Violation
from fleetsim.schemas.base import BaseSchema
from fleetsim.schemas.driver import DriverCreate
from fleetsim.schemas.order import OrderCreate
from fleetsim.schemas.route import RouteCreate
from fleetsim.schemas.simulation import SimulationInputs

S = TypeVar("S", bound=BaseSchema)


@dataclass(frozen=True)
class ValidationResult(Generic[S]):
    """Either a validated schema or the list of violations."""
    value: Optional[S] = None
    violations: tuple[Violation, ...] = field(default_factory=tuple)

    @property
    def is_valid(self) -> bool:
        return not self.violations

    def raise_for_violations(self, subject: str) -> S:
        """Return the validated value or raise SimulationValidationError."""
        if self.violations:
            raise SimulationValidationError(list(self.violations), subject=subject)
        return self.value


def _violations_from(exc: ValidationError) -> tuple[Violation, ...]:
    return tuple(
        Violation(
            field=".".join(str(part) for part in error["loc"]) or "__root__",
            message=error["msg"],
        )
        for error in exc.errors()
    )


def _validate(schema: type[S], data: Any) -> ValidationResult[S]:
    try:
        return ValidationResult(value=schema.model_validate(data))
    except ValidationError as exc:
        return ValidationResult(violations=_violations_from(exc))


def validate_driver(data: Any) -> ValidationResult[DriverCreate]:
    return _validate(DriverCreate, data)


def validate_route(data: Any) -> ValidationResult[RouteCreate]:
    return _validate(RouteCreate, data)


def validate_order(data: Any) -> ValidationResult[OrderCreate]:
    return _validate(OrderCreate, data)


def validate_simulation_inputs(data: Any) -> ValidationResult[SimulationInputs]:
    return _validate(SimulationInputs, data)
