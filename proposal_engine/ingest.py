# CSV exports of bills, VPP catalogs and rebate tables -> input records

import logging
import re
from dataclasses import fields

import pandas as pd

from .schemas import Bill, Customer, StateRebate, VppProvider

logger = logging.getLogger(__name__)

DATE_FIELDS = {"billing_period_start", "billing_period_end"}
INT_FIELDS = {"billing_days", "estimated_events_per_year", "pool_volume_litres"}
BOOL_FIELDS = {"has_gas_bundle", "is_active", "is_percentage", "has_gas", "has_pool", "has_ev", "has_existing_solar"}
LIST_FIELDS = {"available_states", "gas_appliances"}
TEXT_FIELDS = {"bill_type", "retailer", "name", "program_name", "state", "rebate_type", "ev_interest",
               "full_name", "notes"}


def _blank(value) -> bool:
    if value is None:
        return True
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    if isinstance(value, str):
        return value.strip() == ""
    return bool(pd.isna(value))


def _to_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "yes", "y", "1")
    return bool(value)


def _to_list(value) -> list[str]:
    if isinstance(value, (list, tuple)):
        return [str(v).strip() for v in value if str(v).strip()]
    return [part.strip() for part in re.split(r"[;|,]", str(value)) if part.strip()]


def _coerce(name: str, value):
    if _blank(value):
        return None
    if name in DATE_FIELDS:
        return pd.to_datetime(value).date()
    if name in INT_FIELDS:
        return int(float(value))
    if name in BOOL_FIELDS:
        return _to_bool(value)
    if name in LIST_FIELDS:
        return _to_list(value)
    if name in TEXT_FIELDS:
        return str(value).strip()
    return float(value)


def _record(cls, row: dict):
    known = {f.name for f in fields(cls)}
    kwargs = {}
    for name, value in row.items():
        key = str(name).strip()
        if key not in known:
            continue
        coerced = _coerce(key, value)
        if coerced is not None:
            kwargs[key] = coerced
    return cls(**kwargs)


def _load(cls, file_path: str) -> list:
    df = pd.read_csv(file_path)
    records = []
    for index, row in df.iterrows():
        try:
            records.append(_record(cls, row.to_dict()))
        except (TypeError, ValueError) as e:
            logger.warning("Skipping %s row %d in %s: %s", cls.__name__, index, file_path, e)
    logger.debug("Loaded %d %s records from %s", len(records), cls.__name__, file_path)
    return records


def load_bills(file_path: str) -> list[Bill]:
    bills = []
    for bill in _load(Bill, file_path):
        if bill.bill_type not in ("electricity", "gas"):
            logger.warning("Skipping bill with unknown type %r in %s", bill.bill_type, file_path)
            continue
        bills.append(bill)
    return bills


def load_vpp_providers(file_path: str) -> list[VppProvider]:
    return _load(VppProvider, file_path)


def load_state_rebates(file_path: str) -> list[StateRebate]:
    return _load(StateRebate, file_path)


def parse_customer(data: dict) -> Customer:
    return _record(Customer, data)
