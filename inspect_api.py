import os
import sys

import requests
import toml

from infrastructure.settings import DEFAULT_API_BASE_URL, derive_health_url


def get_config():
    try:
        return toml.load(".streamlit/secrets.toml")
    except (OSError, toml.TomlDecodeError) as e:
        print(f"Error reading secrets: {e}")
        return {}


def check_backend():
    config = get_config()
    base_url = (config.get("API_BASE_URL") or os.getenv("API_BASE_URL") or DEFAULT_API_BASE_URL).rstrip("/")
    health_url = config.get("API_HEALTH_URL") or os.getenv("API_HEALTH_URL") or derive_health_url(base_url)

    print(f"🌐 API base: {base_url}")
    try:
        resp = requests.get(health_url, timeout=3)
        icon = "✅" if resp.status_code == 200 else "❌"
        print(f"{icon} Health {health_url}: HTTP {resp.status_code}")
    except requests.RequestException as e:
        print(f"❌ Health {health_url}: {e}")
        return 1

    # The console keeps its token in the browser; paste it from the adminToken cookie to check it.
    token = config.get("ADMIN_TOKEN") or os.getenv("ADMIN_TOKEN")
    if not token:
        print("🔓 No ADMIN_TOKEN given, skipping token check")
        return 0

    try:
        resp = requests.get(
            f"{base_url}/admin/users",
            headers={"Authorization": f"Bearer {token}"},
            timeout=15,
        )
    except requests.RequestException as e:
        print(f"❌ Token check failed: {e}")
        return 1
    if resp.status_code == 401:
        print("🔒 Admin token is rejected (401). Log in again from the console.")
    else:
        print(f"🔑 Admin token accepted: HTTP {resp.status_code}")
    return 0


if __name__ == "__main__":
    sys.exit(check_backend())
