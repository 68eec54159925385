"""APIRouter modules included by server.create_app()."""
