from fastapi import Request

from corsguard.cors.policy import OriginPolicy

async def enforce_origin(request: Request) -> str:
    """Route dependency: validate against app.state.cors_policy, raising a 403 HTTPException on failure."""
    policy: OriginPolicy = getattr(request.app.state, "cors_policy", None) or OriginPolicy()
    return policy.validate(request.headers)
