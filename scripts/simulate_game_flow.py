import argparse

import requests


def main() -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--base", default="http://127.0.0.1:8000")
    ap.add_argument("--rounds", type=int, default=3)
    args = ap.parse_args()

    base = args.base.rstrip("/")
    s = requests.Session()

    r = s.get(f"{base}/healthz", timeout=10)
    print("GET /healthz", r.status_code, r.text[:80])
    if r.status_code != 200:
        return 2

    r = s.post(f"{base}/api/players", timeout=10)
    print("POST /api/players", r.status_code, r.text[:120])
    if r.status_code != 200:
        return 2
    player_id = r.json()["player_id"]

    score = 0
    for i in range(args.rounds):
        r = s.get(f"{base}/api/games/trends/round", timeout=10)
        print("GET /api/games/trends/round", r.status_code, r.text[:200])
        if r.status_code != 200:
            return 2
        chart_url = r.json()["chart_url"]

        r = s.get(f"{base}{chart_url}", timeout=60)
        print("GET", chart_url, r.status_code, r.headers.get("content-type"), len(r.content))
        if r.status_code == 200:
            score += 1

    r = s.get(f"{base}/api/games/food/round", params={"player_id": player_id}, timeout=60)
    print("GET /api/games/food/round", r.status_code, r.text[:240])

    r = s.post(f"{base}/api/scores/trends", json={"player_id": player_id, "score": score}, timeout=10)
    print("POST /api/scores/trends", r.status_code, r.text[:240])
    return 0 if r.status_code == 200 else 2


if __name__ == "__main__":
    raise SystemExit(main())
