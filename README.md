# vaultop

Small, dependency-free building blocks for working with secrets in Python:
an in-memory secret provider, rotation, HMAC-signed tokens and values,
per-key rate limits, redaction, snapshots and rollback, tagging, search and
webhook notifications.

## Installation

    pip install vaultop

To run the test suite:

    pip install "vaultop[test]"
    pytest

## Modules

| Module | Purpose |
| --- | --- |
| `vaultop.provider` | The `Provider` interface, `InMemoryProvider`, and `new_provider` for the types in `ProviderType` (`aws`, `gcp`, `azure`, `vault`). |
| `vaultop.redact` | Masks values with `redact` / `redact_map` in `FULL`, `PARTIAL` or `HASH` mode. |
| `vaultop.sanitize` | Cleans values (`apply`, `apply_map`) and normalises keys (`normalise_key`, `normalise_map`). |
| `vaultop.retry` | `call_with_retry` with exponential backoff; raises `MaxAttemptsReachedError` when all attempts fail. |
| `vaultop.validate` | Checks values against length and regular-expression rules (`validate`, `validate_all`). |
| `vaultop.resolver` | `Resolver` looks keys up through aliases, then ordered fallbacks. |
| `vaultop.quota` | `QuotaLimiter`: a fixed number of operations per key per window. |
| `vaultop.ratelimit` | `RateLimiter`: at most N calls per key within a rolling window. |
| `vaultop.throttle` | `Throttler`: a per-key token bucket. |
| `vaultop.window` | `SlidingWindowCounter`: counts events per key over a rolling window. |
| `vaultop.replay` | `ReplayDetector`: rejects operation IDs seen within a window. |
| `vaultop.ttl` | `TTLMap`: tracks when secrets expire. |
| `vaultop.presign` | `Signer`: time-limited, HMAC-signed references to a single key. |
| `vaultop.tokens` | `TokenManager` issues and validates signed tokens; `TokenStore` tracks, revokes and purges them. |
| `vaultop.watermark` | `WatermarkManager`: appends an HMAC tag to a value and verifies it later. |
| `vaultop.versions` | `VersionStore`: an in-memory, numbered history of values per key. |
| `vaultop.pipeline` | `Pipeline` runs named steps over a shared `State`; `fetch_step`, `validate_step` and `write_step` are built in. |
| `vaultop.snapshot` | `take`, `save`, `load` and `restore` point-in-time captures as JSON files. |
| `vaultop.rollback` | `run_rollback` writes a snapshot back into a provider; `write_summary` prints a report. |
| `vaultop.search` | `find` filters secrets by key prefix, key substring and value substring. |
| `vaultop.tag` | Stores `name=value` tags for a secret under `__tags__/<secret>`. |
| `vaultop.schedule` | `SchedulePolicy`, `check_all` and `filter_due` decide which secrets are due for rotation. |
| `vaultop.rotation` | `Rotator` writes freshly generated values; value generators and `RotationPolicy`. |
| `vaultop.webhook` | `WebhookSender` POSTs events as JSON; `NoopNotifier` and `Dispatcher`. |

Durations are given in seconds (`float`) for the limiters, retry, pipeline
and webhook timeout, and as `datetime.timedelta` for `ttl`, `presign`,
`tokens` and rotation policies. The limiters, `ReplayDetector`, `Signer`
and `TokenManager` accept a `clock` callable, which makes them easy to test.

## Examples

Redact a value:

```python
from vaultop.redact import Mode, Options, redact

redact("supersecret", Options(mode=Mode.PARTIAL, show_suffix=4))  # "***cret"
```

Store and read a secret:

```python
from vaultop.provider import ProviderType, new_provider

store = new_provider(ProviderType.VAULT, {})
store.set_secret("db/password", "secret")
store.get_secret("db/password")            # "secret"
store.list_secrets("db/")                  # ["db/password"]
```

Sign a watermark into a value and check it (the HMAC secret must be at
least 16 bytes):

```python
from vaultop.watermark import WatermarkManager

secret = b"placeholder" * 2
manager = WatermarkManager(secret)
marked = manager.apply("db/password", "value")
manager.verify("db/password", marked)      # "value"
```

Limit how often an operation may run:

```python
from vaultop.ratelimit import RateLimiter, RateLimitedError

limiter = RateLimiter(max_calls=3, window=60.0)
try:
    limiter.allow("rotate:db/password")
except RateLimitedError:
    ...
```

Rotate secrets without writing them:

```python
from vaultop.rotation import RotationOptions, Rotator, fixed_generator

rotator = Rotator(store, RotationOptions(dry_run=True, generator=fixed_generator("value")))
for result in rotator.rotate(["db/password"]):
    print(result.secret_id, result.ok)
```

Failures are reported by raising exceptions; each module defines its own,
for example `QuotaExceededError`, `ReplayError`, `TokenExpiredError` and
`SnapshotError`. `run_rollback` and `Rotator.rotate` are the exception:
they record a failure per key in their results instead of raising.

## What it does not do

- There is no command-line tool; everything is used from Python.
- `new_provider` returns an `InMemoryProvider` for every supported type.
  Nothing talks to a real cloud secret manager, and secrets live only as
  long as the process, except where you save a snapshot to a JSON file.
- There is no persistent audit or history log. `run_rollback` reports each
  key to the standard `logging` logger named `vaultop.audit`.
- Rotation schedules are only evaluated; nothing runs rotations on a timer.