"""Issue a signed bearer token for local testing.

Signs with the same JWT_SECRET / JWT_ALGORITHM the API verifies with, so the
printed token can be sent straight to the cart endpoints.

Usage:
    python scripts/issue_token.py --subject user-42
    python scripts/issue_token.py --subject admin-1 --role admin --ttl 600

    curl -X POST http://localhost:3001/add-to-cart \\
         -H "Authorization: Bearer $(python scripts/issue_token.py --subject user-42)" \\
         -H 'Content-Type: application/json' -d '{"productId":"prod-001","quantity":2}'
"""

import argparse
import sys

# Add src/ to path so we can import domain modules
sys.path.insert(0, "src")


def main():
    parser = argparse.ArgumentParser(description="Issue a signed bearer token")
    parser.add_argument("--subject", required=True, help="Subject (user) id to embed in the token")
    parser.add_argument("--role", choices=["customer", "admin"], default="customer", help="Role claim (default: customer)")
    parser.add_argument("--ttl", type=int, default=None, help="Lifetime in seconds (default: TOKEN_TTL_SECONDS)")
    args = parser.parse_args()

    from identity.auth.jwt_adapter import JwtAuthenticator
    from identity.auth.port import Role
    from shared.settings import get_settings

    settings = get_settings()
    authenticator = JwtAuthenticator(
        secret=settings.jwt_secret.get_secret_value(),
        algorithm=settings.jwt_algorithm,
    )
    token = authenticator.issue_token(
        subject_id=args.subject,
        role=Role(args.role),
        ttl_seconds=args.ttl or settings.token_ttl_seconds,
    )
    print(token)


if __name__ == "__main__":
    main()
