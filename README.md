# clue

Small building blocks for instrumenting Python services.

- **Adaptive trace sampling.** `clue.sampler.AdaptiveSampler` changes how often it samples so that sampling stays at or below a target number of requests per second.
- **Telemetry options.** `clue.options` provides the `Options` dataclass, `default_options(logger)` and option functions: `with_reader_interval`, `with_max_sampling_rate`, `with_sample_size`, `with_propagators` and `with_error_handler`. The default error handler comes from `new_error_handler(logger)`. It logs each error with `logger.error`.
- **Debug logs you can switch on and off at runtime.** `clue.debug.mount_debug_log_enabler` mounts a WSGI endpoint, `/debug` by default, that reads and changes a process-wide switch. `clue.middleware.http_middleware` applies the switch to WSGI requests. `clue.middleware.DebugServerInterceptor` applies it to gRPC calls.
- **Payload logging.** `clue.debug.log_payloads` wraps an endpoint and writes its request payloads and results to the `clue.debug` logger at debug level.
- **Mux adaptation.** `clue.adapters.adapt` wraps a router that registers handlers per HTTP method, so that it can be used as a debug muxer.

## Installation

```
pip install .
```

To run the test suite, install the test extra:

```
pip install ".[test]"
pytest
```

## Adaptive sampling

```python
from clue.sampler import AdaptiveSampler, SamplingDecision

sampler = AdaptiveSampler(2, 10)
print(sampler.description())  # Adaptive{maxSamplingRate:2,sampleSize:10}

if sampler.should_sample(None) is SamplingDecision.RECORD_AND_SAMPLE:
    ...
```

The first argument is the largest number of sampled requests per second. The second is the number of requests between two changes of the sampling rate. Both must be greater than zero; otherwise `ValueError` is raised. Every request is sampled until the first sample size is reached. `should_sample` returns either `SamplingDecision.RECORD_AND_SAMPLE` or `SamplingDecision.DROP`.

## Debug log control

```python
from clue.debug import mount_debug_log_enabler, log_payloads
from clue.debug_options import with_path, with_max_size, with_client
from clue.middleware import http_middleware, DebugServerInterceptor

mount_debug_log_enabler(mux, with_path("admin/debug"))
app = http_middleware()(app)

endpoint = log_payloads(with_max_size(256), with_client())(endpoint)
```

`mux` is any object matching `clue.debug.Muxer`: a WSGI callable with `handle(pattern, handler)` and `handle_func(pattern, handler)` methods.

The enabler endpoint behaves as follows:

- `?debug-logs=on` turns the switch on.
- `?debug-logs=off` turns it off.
- Any other request leaves the switch unchanged.
- Every request gets the current state back as a body such as `{"debug-logs":"on"}`.

Use `with_query`, `with_on_value` and `with_off_value` from `clue.debug_options` to change the parameter name and its values. `clue.debug.set_debug_logs` and `clue.debug.debug_logs_enabled` set and read the switch directly.

`http_middleware` and `DebugServerInterceptor` copy the switch into each request's context. `clue.debug.debug_context_enabled()` reports that per-request value. For streaming gRPC calls, the value is read once, when the call starts.

`log_payloads` logs only when the per-request value is on. Its options are:

- Values are formatted with `clue.debug_options.format_json` by default. Pass `with_format` to use another function.
- Formatted values are cut to 1024 characters by default. Change the limit with `with_max_size`.
- The log keys are `payload` and `result`. `with_client()` changes them to `client-payload` and `client-result`.

## Example forecast service

The package also includes a small weather forecast service:

- `clue.weathergov.WeatherGovClient` is a client for the public weather.gov API, using a `requests` session.
  - It retries a request up to ten times, one second apart, while the status is not 200.
  - It raises `WeatherGovError` on failure.
  - It has `get_forecast(lat, long)`, `name()` and `ping()`.
- `clue.forecaster.ForecasterService` turns the client's forecasts into `clue.forecaster_types.Forecast` results.
- `clue.forecaster_types` holds:
  - the payload and result types;
  - the endpoint wiring: `new_endpoints`, `new_forecast_endpoint` and `Endpoints.use` for middleware;
  - an endpoint-backed `Client`;
  - `build_forecast_payload`, which parses a JSON message such as `{"lat": 37.8267, "long": -122.4233}` and raises `ValueError` on invalid input.

```python
import requests
from clue.weathergov import WeatherGovClient
from clue.forecaster import ForecasterService
from clue.forecaster_types import build_forecast_payload, new_endpoints
from clue.debug import log_payloads

service = ForecasterService(WeatherGovClient(requests.Session()))
endpoints = new_endpoints(service)
endpoints.use(log_payloads())

forecast = endpoints.forecast(build_forecast_payload('{"lat": 37.8267, "long": -122.4233}'))
for period in forecast.periods:
    print(period.name, period.temperature, period.temperature_unit, period.summary)
```

## What this package does not do

- It does not set up or export telemetry. There are no metric or span exporters and no tracer or meter providers. `Options` only holds the settings.
- It does not mount profiling handlers.
- It has no command-line program. It does not run the forecast service as a gRPC or HTTP server and has no health-check endpoints. You wire the endpoints into your own server.