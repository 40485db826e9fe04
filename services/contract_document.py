# services/contract_document.py
"""
Contract document rendering.

render_contract_document builds the agreement text stored on a contract. It
is a pure function of its arguments: no clock, no database, no randomness,
so the same inputs always give byte-identical text.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional

from .contract_terms import ResolvedTerms

CURRENCY = "VND"
DATE_FORMAT = "%d/%m/%Y"


@dataclass(frozen=True)
class ContractParties:
     """Names and the rented resource as they appear in the document."""
     landlord_name: str
     tenant_name: str
     resource_label: str
     resource_address: Optional[str] = None
     landlord_phone: Optional[str] = None
     tenant_email: Optional[str] = None
     tenant_phone: Optional[str] = None


def format_money(amount: Decimal) -> str:
     return f"{Decimal(amount):,.0f} {CURRENCY}"


def _service_costs(terms: ResolvedTerms) -> List[str]:
     lines = [
          f"Electricity: {format_money(terms.electricity_cost_per_kwh)} per kWh",
          f"Water: {format_money(terms.water_cost_per_cubic_meter)} per cubic meter",
     ]
     if terms.has_wifi or terms.internet_cost:
          lines.append(f"Internet: {format_money(terms.internet_cost)} per month")
     if terms.has_parking or terms.parking_cost:
          lines.append(f"Parking: {format_money(terms.parking_cost)} per month")
     if terms.service_fee:
          lines.append(f"Service fee: {format_money(terms.service_fee)} per month")
     return lines


def _house_rules(terms: ResolvedTerms) -> List[str]:
     rules = []
     if terms.allow_cooking:
          rules.append("The Tenant may cook inside the premises and must keep the kitchen area clean.")
     else:
          rules.append("Cooking inside the premises is not permitted.")
     if terms.allow_pets:
          rules.append("Pets are allowed; the Tenant is liable for any damage they cause.")
     else:
          rules.append("Pets are not allowed on the premises.")
     return rules


def render_contract_document(
     terms: ResolvedTerms,
     parties: ContractParties,
     special_terms: Optional[str] = None,
) -> str:
     """Render the residential lease agreement text for resolved terms."""
     lines = [
          "RESIDENTIAL LEASE AGREEMENT",
          "",
          "PARTY A (LANDLORD)",
          f"Name: {parties.landlord_name}",
     ]
     if parties.landlord_phone:
          lines.append(f"Phone: {parties.landlord_phone}")

     lines += [
          "",
          "PARTY B (TENANT)",
          f"Name: {parties.tenant_name}",
     ]
     if parties.tenant_email:
          lines.append(f"Email: {parties.tenant_email}")
     if parties.tenant_phone:
          lines.append(f"Phone: {parties.tenant_phone}")

     lines += [
          "",
          "ARTICLE 1. PREMISES",
          f"Party A leases to Party B: {parties.resource_label}.",
     ]
     if parties.resource_address:
          lines.append(f"Address: {parties.resource_address}")
     lines.append(f"Maximum number of occupants: {terms.max_occupants}")

     lines += [
          "",
          "ARTICLE 2. TERM",
          f"From {terms.start_date.strftime(DATE_FORMAT)} to {terms.end_date.strftime(DATE_FORMAT)}"
          f" ({terms.duration_months} month(s)).",
          "",
          "ARTICLE 3. RENT AND DEPOSIT",
          f"Monthly rent: {format_money(terms.monthly_rent)}",
          f"Deposit: {format_money(terms.deposit)}",
          f"Rent is paid every {terms.payment_cycle_months} month(s), on day {terms.payment_day} of the month.",
          "",
          "ARTICLE 4. SERVICE COSTS",
     ]
     lines += [f"- {line}" for line in _service_costs(terms)]

     lines += [
          "",
          "ARTICLE 5. HOUSE RULES",
     ]
     lines += [f"- {rule}" for rule in _house_rules(terms)]
     if terms.regulations:
          lines.append(f"- Property regulations: {terms.regulations.strip()}")

     if special_terms and special_terms.strip():
          lines += [
               "",
               "ARTICLE 6. SPECIAL TERMS",
               special_terms.strip(),
          ]

     lines += [
          "",
          "Both parties have read and agree to the terms above.",
     ]
     return "\n".join(lines) + "\n"
