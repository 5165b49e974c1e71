#!/usr/bin/env python3
"""
Inventory analytics server launcher.

    python -m inventory_analytics.run_server
"""

import logging
import os


def main() -> None:
    import uvicorn

    logging.basicConfig(
        level=os.environ.get("INVENTORY_ANALYTICS_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        "inventory_analytics.api:app",
        host=os.environ.get("INVENTORY_ANALYTICS_HOST", "127.0.0.1"),
        port=int(os.environ.get("INVENTORY_ANALYTICS_PORT", "8000")),
        reload=os.environ.get("INVENTORY_ANALYTICS_RELOAD", "").lower() in ("true", "1", "yes"),
    )


if __name__ == "__main__":
    main()
