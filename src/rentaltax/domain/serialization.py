"""JSON serialization of model inputs, results and scenarios.

Keys use the camelCase layout of the saved-scenario format
(``baseTaxableIncome``, ``propertyPurchase``, ``rentalPL`` ...) so stored
scenarios and exported JSON stay readable by other tools. The JSON shape is
described by pydantic schemas that mirror the domain entities; loading
tolerates missing keys by falling back to defaults, and ignores unknown keys.
"""

import json
from dataclasses import asdict
from datetime import datetime
from typing import Annotated, Any, ClassVar, Optional, Union

import pydantic
from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    StrictBool,
    StrictStr,
    field_serializer,
)
from pydantic.alias_generators import to_camel as _snake_to_camel

from rentaltax.domain.entities import (
    CashflowResults,
    DepreciationInputs,
    DepreciationResults,
    OperatingExpensesInputs,
    PersonalInputs,
    PropertyModelInputs,
    PropertyModelResults,
    PropertyPurchaseInputs,
    RentalIncomeInputs,
    RentalPLResults,
    Scenario,
    TaxImpactResults,
    TaxScenarioResults,
    default_inputs,
)
from rentaltax.domain.errors import ValidationError

# Attribute names whose JSON key is not a plain camelCase conversion
_KEY_OVERRIDES = {
    "rental_pl": "rentalPL",
    "monthly_pi": "monthlyPI",
    "annual_pi": "annualPI",
    "monthly_io": "monthlyIO",
    "annual_io": "annualIO",
    "monthly_savings_io": "monthlySavingsIO",
    "total_interest_pi": "totalInterestPI",
    "total_interest_io": "totalInterestIO",
    "extra_interest_io": "extraInterestIO",
    "principal_remaining_io": "principalRemainingIO",
}


def to_camel(name: str) -> str:
    """Convert a snake_case attribute name to its JSON key."""
    return _KEY_OVERRIDES.get(name) or _snake_to_camel(name)


def _require_number(value: Any) -> Any:
    # bool is an int subclass and numeric strings would be coerced otherwise
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"expected a number, got {value!r}")
    return value


def _whole_years(value: Union[int, float]) -> Union[int, float]:
    # Fractional terms are kept so the validation gate can report them
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _parse_timestamp(value: Any) -> Any:
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise ValueError(f"expected an ISO timestamp, got {value!r}")
    try:
        return datetime.fromisoformat(value)
    except ValueError as e:
        raise ValueError(f"invalid timestamp {value!r}") from e


Number = Annotated[float, BeforeValidator(_require_number)]
Years = Annotated[Union[int, float], BeforeValidator(_require_number), AfterValidator(_whole_years)]
Timestamp = Annotated[datetime, BeforeValidator(_parse_timestamp)]


class JSONSchema(BaseModel):
    """Base schema: camelCase keys on the wire, snake_case attributes in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    entity: ClassVar[type]

    def to_entity(self) -> Any:
        return self.entity(**{name: getattr(self, name) for name in type(self).model_fields})

    @classmethod
    def from_entity(cls, record: Any) -> "JSONSchema":
        return cls.model_validate(asdict(record))


# Input schemas


class PersonalSchema(JSONSchema):
    entity = PersonalInputs

    base_taxable_income: Number
    ownership_percentage: Number
    marginal_tax_rate: Number
    medicare_levy_rate: Number


class PropertyPurchaseSchema(JSONSchema):
    entity = PropertyPurchaseInputs

    purchase_price: Number
    loan_amount: Number
    interest_rate: Number
    loan_term_years: Years
    is_interest_only: StrictBool
    settlement_date: StrictStr


class RentalIncomeSchema(JSONSchema):
    entity = RentalIncomeInputs

    weekly_rent: Number
    vacancy_weeks_per_year: Number


class OperatingExpensesSchema(JSONSchema):
    entity = OperatingExpensesInputs

    property_management: Number
    council_rates: Number
    water_rates: Number
    insurance: Number
    repairs_maintenance: Number
    body_corporate: Number
    other_expenses: Number
    other_expenses_description: StrictStr = ""


class DepreciationInputsSchema(JSONSchema):
    entity = DepreciationInputs

    construction_value: Number
    plant_equipment_annual: Number


class InputsSchema(JSONSchema):
    """Input snapshot, one object per section."""

    entity = PropertyModelInputs

    personal: PersonalSchema
    property_purchase: PropertyPurchaseSchema
    rental_income: RentalIncomeSchema
    operating_expenses: OperatingExpensesSchema
    depreciation: DepreciationInputsSchema

    def to_entity(self) -> PropertyModelInputs:
        return PropertyModelInputs(
            personal=self.personal.to_entity(),
            property_purchase=self.property_purchase.to_entity(),
            rental_income=self.rental_income.to_entity(),
            operating_expenses=self.operating_expenses.to_entity(),
            depreciation=self.depreciation.to_entity(),
        )


# Result schemas


class CashflowSchema(JSONSchema):
    entity = CashflowResults

    gross_rental_income: Number
    total_operating_expenses: Number
    interest_expense: Number
    net_cashflow_pre_tax: Number


class DepreciationResultsSchema(JSONSchema):
    entity = DepreciationResults

    capital_works_deduction: Number
    plant_equipment_deduction: Number
    total_depreciation: Number


class RentalPLSchema(JSONSchema):
    entity = RentalPLResults

    net_cashflow_pre_tax: Number
    total_depreciation: Number
    net_rental_result: Number
    is_negatively_geared: StrictBool


class TaxScenarioSchema(JSONSchema):
    entity = TaxScenarioResults

    taxable_income: Number
    income_tax: Number
    medicare_levy: Number
    total_tax: Number


class TaxImpactSchema(JSONSchema):
    entity = TaxImpactResults

    without_property: TaxScenarioSchema
    with_property: TaxScenarioSchema
    tax_benefit: Number
    after_tax_cashflow: Number

    def to_entity(self) -> TaxImpactResults:
        return TaxImpactResults(
            without_property=self.without_property.to_entity(),
            with_property=self.with_property.to_entity(),
            tax_benefit=self.tax_benefit,
            after_tax_cashflow=self.after_tax_cashflow,
        )


class ResultsSchema(JSONSchema):
    entity = PropertyModelResults

    cashflow: CashflowSchema
    depreciation: DepreciationResultsSchema
    rental_pl: RentalPLSchema
    tax_impact: TaxImpactSchema

    def to_entity(self) -> PropertyModelResults:
        return PropertyModelResults(
            cashflow=self.cashflow.to_entity(),
            depreciation=self.depreciation.to_entity(),
            rental_pl=self.rental_pl.to_entity(),
            tax_impact=self.tax_impact.to_entity(),
        )


# Scenario schema


class ScenarioSchema(JSONSchema):
    entity = Scenario

    id: StrictStr
    name: StrictStr
    inputs: InputsSchema
    created_at: Timestamp
    updated_at: Timestamp

    @field_serializer("created_at", "updated_at")
    def _serialize_timestamp(self, value: datetime) -> str:
        return value.isoformat()

    def to_entity(self) -> Scenario:
        return Scenario(
            id=self.id,
            name=self.name,
            inputs=self.inputs.to_entity(),
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


def _describe(error: pydantic.ValidationError) -> str:
    """Summarise pydantic errors using the JSON key paths."""
    parts = []
    for item in error.errors():
        path = ".".join(str(part) for part in item["loc"]) or "value"
        parts.append(f"{path}: {item['msg']}")
    return "; ".join(parts)


def _validate(schema: type[JSONSchema], data: Any, what: str) -> Any:
    try:
        return schema.model_validate(data).to_entity()
    except pydantic.ValidationError as e:
        raise ValidationError(f"Invalid {what}: {_describe(e)}") from e


def _with_defaults(data: Any, defaults: PropertyModelInputs) -> Any:
    """Fill missing sections and fields of a raw inputs object from defaults."""
    if not isinstance(data, dict):
        raise ValidationError(f"Inputs must be a JSON object, got {type(data).__name__}")

    merged = dict(data)
    for key, fallback in inputs_to_dict(defaults).items():
        section = data.get(key)
        if section is None:
            merged[key] = fallback
        elif isinstance(section, dict):
            merged[key] = {**fallback, **section}
    return merged


def inputs_to_dict(inputs: PropertyModelInputs) -> dict[str, Any]:
    """Serialize an input snapshot."""
    return InputsSchema.from_entity(inputs).model_dump(by_alias=True)


def inputs_from_dict(
    data: dict[str, Any], defaults: Optional[PropertyModelInputs] = None
) -> PropertyModelInputs:
    """Deserialize an input snapshot.

    Args:
        data: Parsed JSON object
        defaults: Values used for missing sections or fields

    Returns:
        PropertyModelInputs

    Raises:
        ValidationError: If a value has the wrong JSON type
    """
    if defaults is None:
        defaults = default_inputs()
    return _validate(InputsSchema, _with_defaults(data, defaults), "inputs")


def results_to_dict(results: PropertyModelResults) -> dict[str, Any]:
    """Serialize a result set."""
    return ResultsSchema.from_entity(results).model_dump(by_alias=True)


def results_from_dict(data: dict[str, Any]) -> PropertyModelResults:
    """Deserialize a result set written by results_to_dict.

    Raises:
        ValidationError: If a key is missing or has the wrong type
    """
    return _validate(ResultsSchema, data, "results")


def scenario_to_dict(scenario: Scenario) -> dict[str, Any]:
    """Serialize a saved scenario with ISO timestamps."""
    schema = ScenarioSchema(
        id=scenario.id,
        name=scenario.name,
        inputs=InputsSchema.from_entity(scenario.inputs),
        created_at=scenario.created_at,
        updated_at=scenario.updated_at,
    )
    return schema.model_dump(by_alias=True)


def scenario_from_dict(data: dict[str, Any]) -> Scenario:
    """Deserialize a saved scenario.

    Missing input fields fall back to the default inputs.

    Raises:
        ValidationError: If a key is missing, a value has the wrong type
            or a timestamp is malformed
    """
    if not isinstance(data, dict):
        raise ValidationError(f"Scenario must be a JSON object, got {type(data).__name__}")
    if isinstance(data.get("inputs"), dict):
        data = {**data, "inputs": _with_defaults(data["inputs"], default_inputs())}
    return _validate(ScenarioSchema, data, "scenario")


def dumps_inputs(inputs: PropertyModelInputs, indent: Optional[int] = 2) -> str:
    """Serialize an input snapshot to JSON text."""
    return json.dumps(inputs_to_dict(inputs), indent=indent)


def loads_inputs(text: str, defaults: Optional[PropertyModelInputs] = None) -> PropertyModelInputs:
    """Parse an input snapshot from JSON text.

    Raises:
        ValidationError: If the text is not valid JSON or has wrong types
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON: {e}") from e
    return inputs_from_dict(data, defaults)


def dumps_results(results: PropertyModelResults, indent: Optional[int] = 2) -> str:
    """Serialize a result set to JSON text."""
    return json.dumps(results_to_dict(results), indent=indent)
