import logging
from fastapi import APIRouter, Request, HTTPException
from actions import run_action
from errors import AuthenticationError, ConfigurationError, TeamCreationError, ValidationError

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/health")
async def health_check():
    return {"status": "healthy"}

@router.get("/api/actions")
async def list_actions(request: Request):
    """List registered scaffolder actions with their schemas."""
    registry = request.app.state.actions
    return [
        {"id": action.id, "description": action.description, "schema": action.schema}
        for action in registry.list()
    ]

@router.post("/api/actions/{action_id}")
async def execute_action(action_id: str, request: Request):
    """Run a scaffolder action with the JSON body as its input."""
    try:
        action = request.app.state.actions.get(action_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown action: {action_id}")

    try:
        data = await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail="Action input must be valid JSON")
    if not isinstance(data, dict):
        raise HTTPException(status_code=400, detail="Action input must be a JSON object")

    try:
        outputs = await run_action(action, data)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except AuthenticationError as e:
        logger.error("Action %s failed: %s", action_id, e)
        raise HTTPException(status_code=401, detail=str(e))
    except ConfigurationError as e:
        logger.error("Action %s failed: %s", action_id, e)
        raise HTTPException(status_code=500, detail=str(e))
    except TeamCreationError as e:
        logger.error("Action %s failed: %s", action_id, e)
        raise HTTPException(status_code=502, detail=str(e))

    return {"output": outputs}
