# Path: spec_health/tests/fixtures.py
"""
Markdown documents shared by the spec health tests.

SCENARIO_A is a complete refund-service specification on which every
sub-check scores 1. The other documents are derived from it or built
to isolate one behaviour.
"""

SCENARIO_A = """\
# Refund Service Specification

## Overview

Issues refunds for settled card payments through the payments gateway.

## Scope

### In Scope
- Full refunds for settled card payments
- Partial refunds up to the captured amount

### Out of Scope
- Chargeback disputes
- Refunds for cash payments
- Currency conversion

## Reference Implementation

Follow the existing capture flow in `src/payments/capture.py`.

## Requirements

- FR-1: The system must create a refund record for every accepted refund request.
- FR-2: The system must reject refund amounts above the captured amount with REFUND_EXCEEDS_CAPTURE.
- FR-3: The system must emit a `refund.created` event within 5 seconds of acceptance.

## Prohibitions

- P1: NEVER refund more than the captured amount — over-refunds lose money (test: AC-N1)
- P2: NEVER log full card numbers — violates PCI scope (test: AC-N2)
- P3: NEVER issue a refund for a payment that is not settled — the gateway rejects it (test: AC-N3)
- P4: NEVER call the gateway synchronously from the request thread — it blocks workers (test: AC-N4)
- P5: NEVER retry a refund that returned a definitive decline — duplicates confuse customers (test: AC-N5)
- P6: NEVER store gateway credentials in the database — secrets belong in the vault (test: AC-N6)

## Decision Tree

- If the payment is not settled → reject with PAYMENT_NOT_SETTLED
- If the amount exceeds the captured amount → reject with REFUND_EXCEEDS_CAPTURE
- Otherwise → submit the refund to the gateway queue

## Domain Rules & Exceptions

| Rule | Threshold | Exception |
|------|-----------|-----------|
| Refund window | 180 days after capture | Card network override |
| Minimum refund | 0.50 USD | None |

## Escalation & Guardrails

- Fail if the gateway returns 5xx three times in a row.
- Queue for review if a single refund exceeds 10,000.00 USD.

## Data Model

**Refund**: id, payment_id, amount, status, created_at

## API Contract

- `POST /v1/refunds` creates a refund and returns 201 with the refund body.

## Acceptance Criteria

### Happy Path
- AC-H1: A refund of 25.00 on a settled 100.00 payment returns 201 with status "PENDING".
- AC-H2: A partial refund emits `refund.created` within 5 seconds.

### Negative
- AC-N1: A refund of 150.00 on a 100.00 capture returns 422 with REFUND_EXCEEDS_CAPTURE.
- AC-N2: Application logs for a refund of 10.00 contain only the last 4 card digits.
- AC-N3: A refund on a payment in status "AUTHORIZED" returns 409 with PAYMENT_NOT_SETTLED.
- AC-N4: A refund request returns 202 before the gateway call completes.
- AC-N5: A refund declined with code "05" is attempted exactly 1 time.
- AC-N6: The `gateway_credentials` column does not exist in the 3 payment tables.

### Edge Case
- AC-E1: A refund of exactly 100.00 on a 100.00 capture returns 201.

### Resilience
- AC-R1: A gateway timeout after 30 seconds leaves the refund in status "PENDING".

## Files to Create/Modify

- `src/payments/refunds.py`: refund record creation and amount validation
- `src/payments/gateway_client.py`: asynchronous gateway submission

## Observability

- Log every rejected refund at WARN with the payment id.
- Emit the `refunds.rejected_total` counter and the `refunds.gateway_latency_ms` histogram.
"""


# Missing API Contract, Observability and Files; 'it depends' decision tree;
# two prohibitions, only the first with a rationale and a negative test.
SCENARIO_B = """\
# Refund Service Specification

## Overview

Issues refunds for settled card payments through the payments gateway.

## Scope

### In Scope
- Full refunds for settled card payments

### Out of Scope
- Chargeback disputes
- Refunds for cash payments
- Currency conversion

## Reference Implementation

Follow the existing capture flow in `src/payments/capture.py`.

## Requirements

- FR-1: The system must create a refund record for every accepted refund request.
- FR-2: The system must reject refund amounts above the captured amount with REFUND_EXCEEDS_CAPTURE.
- FR-3: The system must emit a `refund.created` event within 5 seconds of acceptance.

## Prohibitions

- P1: NEVER refund more than the captured amount — over-refunds lose money (test: AC-N1)
- P2: NEVER log full card numbers

## Decision Tree

- It depends on the payment state.

## Domain Rules & Exceptions

| Rule | Threshold | Exception |
|------|-----------|-----------|
| Refund window | 180 days after capture | Card network override |

## Escalation & Guardrails

- Fail if the gateway returns 5xx three times in a row.
- Queue for review if a single refund exceeds 10,000.00 USD.

## Data Model

**Refund**: id, payment_id, amount, status, created_at

## Acceptance Criteria

- AC-H1: A refund of 25.00 on a settled 100.00 payment returns 201 with status "PENDING".
- Negative: AC-N1 a refund of 150.00 on a 100.00 capture returns 422 with REFUND_EXCEEDS_CAPTURE.
"""


# No prohibitions at all
SCENARIO_D = """\
# Export Job

## Overview

Exports nightly order totals to the warehouse.

## Scope

- Nightly export of order totals

Out of Scope:
- Real-time streaming
- Backfills older than 90 days

## Requirements

- Write one row per order to the `orders_daily` table within 15 minutes of midnight.

## Acceptance Criteria

- Negative: an export with 0 orders writes 0 rows and exits with code 0.
"""


# Strong on constraints, nearly empty otherwise: SKETCH with Completeness weakest
COMPLETENESS_GAP = """\
# Refund Service

## Overview

Issues refunds for settled card payments within 30 seconds.

## Scope

Out of Scope:
- Chargeback disputes
- Currency conversion

## Prohibitions

- NEVER refund more than the captured amount — over-refunds lose money
- NEVER log full card numbers — violates PCI scope
- NEVER issue a refund for an unsettled payment — the gateway rejects it
- NEVER call the gateway from the request thread — it blocks workers
- NEVER store gateway credentials in the database — secrets belong in the vault

## Escalation & Guardrails

- Fail if the gateway is unreachable.
"""


# Weasel-heavy, vague and full of open markers: VAGUE with Clarity weakest
CLARITY_GAP = SCENARIO_A.replace(
    "Issues refunds for settled card payments through the payments gateway.",
    "Issues refunds as needed, if appropriate, for card payments, wallets, etc. "
    "Retries happen as necessary and when possible. Callers might retry; teams "
    "should consider batching and could potentially cache. Operators may want to "
    "audit refunds as needed.",
).replace(
    "- FR-1: The system must create a refund record for every accepted refund request.",
    "- FR-1: The system must handle refund requests.",
).replace(
    "- If the payment is not settled → reject with PAYMENT_NOT_SETTLED\n"
    "- If the amount exceeds the captured amount → reject with REFUND_EXCEEDS_CAPTURE\n"
    "- Otherwise → submit the refund to the gateway queue\n",
    "- It depends on the payment.\n",
) + """
## Open Questions

- [NEEDS CLARIFICATION: refund currency]
- [NEEDS CLARIFICATION: partial refund count]
- [NEEDS CLARIFICATION: gateway choice]
- [NEEDS CLARIFICATION: refund window]
- [NEEDS CLARIFICATION: notification channel]
- [NEEDS CLARIFICATION: ledger export]
- [NEEDS CLARIFICATION: audit retention]
"""


CONVENTIONS = """\
# Project conventions

- Don't use: moment.js
- Do not use: float for money
"""


WHITESPACE_ONLY = "   \n\t\n  "
