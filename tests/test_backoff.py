from datetime import timedelta

from http_toolkit.backoff import (
    CallbackBackoffStrategy,
    ExponentialBackoffStrategy,
    FixedBackoffStrategy,
    JitteredBackoffStrategy,
    LinearBackoffStrategy,
)


def test_exponential_doubles_from_500ms_by_default():
    strategy = ExponentialBackoffStrategy()

    delays = [strategy.get_delay(attempt) for attempt in range(1, 6)]

    assert delays == [
        timedelta(milliseconds=500),
        timedelta(seconds=1),
        timedelta(seconds=2),
        timedelta(seconds=4),
        timedelta(seconds=8),
    ]


def test_exponential_stays_exact_for_large_attempts():
    strategy = ExponentialBackoffStrategy(timedelta(milliseconds=100))

    assert strategy.get_delay(30) == timedelta(milliseconds=100 * 2**29)


def test_exponential_respects_max_delay():
    strategy = ExponentialBackoffStrategy(0.5, max_delay=3)

    assert strategy.get_delay(3) == timedelta(seconds=2)
    assert strategy.get_delay(4) == timedelta(seconds=3)
    assert strategy.get_delay(10) == timedelta(seconds=3)


def test_linear_multiplies_base_delay():
    strategy = LinearBackoffStrategy(timedelta(seconds=1))

    assert strategy.get_delay(1) == timedelta(seconds=1)
    assert strategy.get_delay(3) == timedelta(seconds=3)


def test_linear_accepts_float_seconds_and_cap():
    strategy = LinearBackoffStrategy(0.25, max_delay=0.5)

    assert strategy.get_delay(1) == timedelta(milliseconds=250)
    assert strategy.get_delay(5) == timedelta(milliseconds=500)


def test_fixed_ignores_attempt():
    strategy = FixedBackoffStrategy(timedelta(seconds=2))

    assert {strategy.get_delay(attempt) for attempt in range(1, 10)} == {timedelta(seconds=2)}


def test_callback_strategy_coerces_seconds():
    strategy = CallbackBackoffStrategy(lambda attempt: attempt * 0.1)

    assert strategy.get_delay(2) == timedelta(milliseconds=200)


def test_jitter_adds_scaled_random_component():
    strategy = JitteredBackoffStrategy(
        FixedBackoffStrategy(1.0),
        jitter=timedelta(seconds=1),
        random_fn=lambda: 0.5,
    )

    assert strategy.get_delay(1) == timedelta(milliseconds=1500)
