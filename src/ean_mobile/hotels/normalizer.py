"""Utilities to transform raw reservation payloads into domain objects."""
from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Mapping, Tuple

from ean_mobile.utils.json_fields import (
    one_or_many,
    opt_bool,
    opt_dict,
    opt_float,
    opt_int,
    opt_str,
    without_attribute_prefix,
)

from .dates import parse_api_date, parse_api_time
from .enums import ConfirmationStatus, SupplierType
from .models import (
    Address,
    CancellationPolicy,
    CancellationPolicyEntry,
    ChargeableRate,
    NightlyRate,
    Rate,
    Reservation,
    RoomGroupEntry,
    Surcharge,
)

logger = logging.getLogger(__name__)


def _to_int(value: Any) -> int:
    return opt_int({"value": value}, "value")


def _confirmation_numbers(document: Mapping[str, Any]) -> Tuple[int, ...]:
    raw = document.get("confirmationNumbers")
    numbers = tuple(_to_int(item) for item in one_or_many(raw))
    # A missing field still yields a single placeholder number.
    return numbers or (0,)


def build_address(document: Mapping[str, Any]) -> Address:
    return Address(
        line1=opt_str(document, "hotelAddress"),
        city=opt_str(document, "hotelCity"),
        state_province_code=opt_str(document, "hotelStateProvinceCode"),
        country_code=opt_str(document, "hotelCountryCode"),
        postal_code=opt_str(document, "hotelPostalCode"),
    )


def _rate_info_entries(document: Mapping[str, Any]) -> List[Dict[str, Any]]:
    rate_infos = opt_dict(document, "RateInfos")
    return [entry for entry in one_or_many(rate_infos.get("RateInfo")) if isinstance(entry, dict)]


def _build_policy_entry(raw: Mapping[str, Any], arrival_date: date) -> CancellationPolicyEntry:
    cancel_time = parse_api_time(opt_str(raw, "cancelTime"))
    start_window_hours = opt_int(raw, "startWindowHours")
    anchor = datetime.combine(arrival_date, cancel_time)
    try:
        deadline = anchor - timedelta(hours=start_window_hours)
    except OverflowError:
        # Out-of-range windows clamp to the representable bound.
        deadline = datetime.min if start_window_hours > 0 else datetime.max
        logger.debug("Clamped cancellation deadline for startWindowHours=%s", start_window_hours)
    return CancellationPolicyEntry(
        version_id=opt_int(raw, "versionId"),
        cancel_time=cancel_time,
        start_window_hours=start_window_hours,
        night_count=opt_int(raw, "nightCount"),
        amount=opt_float(raw, "amount"),
        percent=opt_float(raw, "percent"),
        currency_code=opt_str(raw, "currencyCode"),
        time_zone_description=opt_str(raw, "timeZoneDescription"),
        deadline=deadline,
    )


def build_cancellation_policy(document: Mapping[str, Any], arrival_date: date) -> CancellationPolicy:
    """Decode the cancellation policy, resolving penalty windows against ``arrival_date``."""
    text = opt_str(document, "cancellationPolicy")
    policy_list = opt_dict(document, "CancelPolicyInfoList")
    if not policy_list:
        first_rate = next(iter(_rate_info_entries(document)), {})
        policy_list = opt_dict(first_rate, "CancelPolicyInfoList")
        if not text:
            text = opt_str(first_rate, "cancellationPolicy")
    entries = tuple(
        _build_policy_entry(raw, arrival_date)
        for raw in one_or_many(policy_list.get("CancelPolicyInfo"))
        if isinstance(raw, dict)
    )
    return CancellationPolicy(text=text, entries=entries)


def _build_chargeable_rate(raw: Mapping[str, Any]) -> ChargeableRate:
    info = without_attribute_prefix(raw)
    nightly_container = opt_dict(info, "NightlyRatesPerRoom")
    surcharge_container = opt_dict(info, "Surcharges")
    nightly_rates = tuple(
        NightlyRate(
            base_rate=opt_float(nightly, "baseRate"),
            rate=opt_float(nightly, "rate"),
            promo=opt_bool(nightly, "promo"),
        )
        for nightly in (without_attribute_prefix(item) for item in one_or_many(nightly_container.get("NightlyRate")))
    )
    surcharges = tuple(
        Surcharge(type=opt_str(surcharge, "type"), amount=opt_float(surcharge, "amount"))
        for surcharge in (without_attribute_prefix(item) for item in one_or_many(surcharge_container.get("Surcharge")))
    )
    return ChargeableRate(
        currency_code=opt_str(info, "currencyCode"),
        total=opt_float(info, "total"),
        average_rate=opt_float(info, "averageRate"),
        average_base_rate=opt_float(info, "averageBaseRate"),
        nightly_rate_total=opt_float(info, "nightlyRateTotal"),
        surcharge_total=opt_float(info, "surchargeTotal"),
        nightly_rates=nightly_rates,
        surcharges=surcharges,
    )


def _build_rooms(raw: Mapping[str, Any]) -> Tuple[RoomGroupEntry, ...]:
    room_group = opt_dict(raw, "RoomGroup")
    rooms: List[RoomGroupEntry] = []
    for room in one_or_many(room_group.get("Room")):
        if not isinstance(room, dict):
            continue
        rooms.append(
            RoomGroupEntry(
                rate_key=opt_str(room, "rateKey"),
                number_of_adults=opt_int(room, "numberOfAdults"),
                number_of_children=opt_int(room, "numberOfChildren"),
                first_name=opt_str(room, "firstName"),
                last_name=opt_str(room, "lastName"),
                bed_type_description=opt_str(room, "bedTypeDescription"),
            )
        )
    return tuple(rooms)


def build_rate(raw: Mapping[str, Any]) -> Rate:
    info = without_attribute_prefix(raw)
    return Rate(
        promo=opt_bool(info, "promo"),
        non_refundable=opt_bool(info, "nonRefundable"),
        rate_type=opt_str(info, "rateType"),
        current_allotment=opt_int(info, "currentAllotment"),
        chargeable=_build_chargeable_rate(opt_dict(info, "ChargeableRateInfo")),
        rooms=_build_rooms(info),
    )


def build_rate_informations(document: Mapping[str, Any]) -> Tuple[Rate, ...]:
    return tuple(build_rate(entry) for entry in _rate_info_entries(document))


def parse_reservation(document: Mapping[str, Any]) -> Reservation:
    """Build a :class:`Reservation` from a booking response document.

    Optional fields fall back to empty strings, ``False`` or ``0``. The arrival
    and departure dates are required and raise
    :class:`~ean_mobile.hotels.dates.DateFormatError` when malformed.
    """
    arrival_date = parse_api_date(document.get("arrivalDate"), field="arrivalDate")
    departure_date = parse_api_date(document.get("departureDate"), field="departureDate")
    reservation = Reservation(
        itinerary_id=opt_int(document, "itineraryId"),
        confirmation_numbers=_confirmation_numbers(document),
        processed_with_confirmation=opt_bool(document, "processedWithConfirmation"),
        error_text=opt_str(document, "errorText"),
        hotel_reply_text=opt_str(document, "hotelReplyText"),
        supplier_type=SupplierType.from_code(opt_str(document, "supplierType")),
        reservation_status_code=ConfirmationStatus.from_code(opt_str(document, "reservationStatusCode")),
        existing_itinerary=opt_bool(document, "existingItinerary"),
        check_in_instructions=opt_str(document, "checkInInstructions"),
        arrival_date=arrival_date,
        departure_date=departure_date,
        hotel_name=opt_str(document, "hotelName"),
        hotel_address=build_address(document),
        room_description=opt_str(document, "roomDescription"),
        non_refundable=opt_bool(document, "nonRefundable"),
        rate_occupancy_per_room=opt_int(document, "rateOccupancyPerRoom"),
        cancellation_policy=build_cancellation_policy(document, arrival_date),
        rate_informations=build_rate_informations(document),
    )
    logger.debug(
        "Parsed reservation itinerary=%s confirmations=%s status=%s",
        reservation.itinerary_id,
        reservation.confirmation_numbers,
        reservation.reservation_status_code.name,
    )
    return reservation
