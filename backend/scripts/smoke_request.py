"""Run a quick smoke test against the app in-process.

Creates a portfolio, reads it back, lists it for its owner and deletes
it again, printing each response.
Usage: python scripts/smoke_request.py [--user-id ID]
"""

import argparse
import pathlib
import sys

# Ensure `backend/` is on sys.path so `portfolio_api` imports work when running this script directly
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from fastapi.testclient import TestClient
from portfolio_api.main import app


def main(user_id: int = 1):
    client = TestClient(app)
    resp = client.get('/health')
    print('HEALTH:', resp.status_code, resp.json())
    created = client.post('/api/v1/portfolios', json={'name': 'Smoke Test', 'userId': user_id, 'riskProfile': 'LOW'})
    print('CREATE:', created.status_code, created.headers.get('Location'), created.json())
    if created.status_code != 201:
        return
    pid = created.json()['data']['id']
    print('GET:', client.get(f'/api/v1/portfolios/{pid}').json())
    print('LIST:', client.get('/api/v1/portfolios', params={'userId': user_id}).json())
    print('DELETE:', client.delete(f'/api/v1/portfolios/{pid}').status_code)


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Smoke test the portfolio API')
    parser.add_argument('--user-id', type=int, default=1)
    args = parser.parse_args()
    main(args.user_id)
