#!/usr/bin/env python3
"""
main.py
=======
Entry point: configures logging, builds the stores and the staleness
sweeper, and serves the HTTP API with uvicorn.

Usage::

    python main.py                 # → http://0.0.0.0:3000
    PORT=8080 python main.py
"""

import logging

import uvicorn

import config
from logging_setup import setup_logging
from server.http_api import create_app
from tracking.intersections import IntersectionRegistry
from tracking.location_store import LocationStore
from tracking.signal_engine import SignalPolicy
from tracking.sweeper import StalenessSweeper


def main() -> None:
    setup_logging(config.LOG_LEVEL, config.LOG_FILE)
    log = logging.getLogger("main")

    locations = LocationStore()
    sweeper = StalenessSweeper(
        locations,
        interval_s=config.SWEEP_INTERVAL_S,
        max_age_ms=config.STALE_AFTER_MS,
    )
    app = create_app(
        locations=locations,
        intersections=IntersectionRegistry(),
        policy=SignalPolicy(proximity_radius_m=config.PROXIMITY_RADIUS_M),
        sweeper=sweeper,
    )

    log.info("Server listening on %s:%d", config.HOST, config.PORT)
    # log_config=None keeps the handlers installed by setup_logging
    uvicorn.run(app, host=config.HOST, port=config.PORT, log_config=None)


if __name__ == "__main__":
    main()
