import argparse
import logging

import uvicorn
from mealplanner.api.api_run import app
from mealplanner.infra.db import SessionLocal, init_db
from mealplanner.infra.seed import seed_from_csv
from mealplanner.utilities.config import APP_HOST, APP_PORT, LOG_LEVEL, SEED_CSV
from mealplanner.utilities.network import get_local_ip

logger = logging.getLogger("mealplanner")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Meal Planner API server")
    parser.add_argument("--seed", action="store_true",
                        help=f"load meals from {SEED_CSV.name} before starting")
    parser.add_argument("--host", default=APP_HOST)
    parser.add_argument("--port", type=int, default=APP_PORT)
    return parser.parse_args(argv)


def seed():
    if not SEED_CSV.exists():
        logger.warning("Seed file %s not found; starting with the current database", SEED_CSV)
        return
    with SessionLocal() as session:
        added = seed_from_csv(session, SEED_CSV)
    print(f"Seeded {added} meals from {SEED_CSV}")


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    init_db()
    if args.seed:
        seed()

    local_url = f"http://localhost:{args.port}"
    local_ip = get_local_ip()
    lan_url = f"http://{local_ip}:{args.port}"
    # Print a friendly message that points to the URL the frontend should call
    print(f"Meal Planner API running on {local_url}/api (Press CTRL+C to quit)")
    # Also show the LAN-accessible URL for other devices on the same network
    if local_ip not in ("127.0.0.1", "localhost"):
        print(f"Accessible from other devices at: {lan_url}/api")
    uvicorn.run(app, host=args.host, port=args.port, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
