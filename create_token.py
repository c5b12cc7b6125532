"""Print a long-lived bearer token for the site administrator.

Usage:
    python create_token.py [email] [days]
"""
import sys

from noita_api.app.core.security import create_access_token

email = sys.argv[1] if len(sys.argv) > 1 else "admin@noita.ch"
days = int(sys.argv[2]) if len(sys.argv) > 2 else 365
token = create_access_token({"sub": email}, expires_delta=days * 24 * 60 * 60)
print(token)
