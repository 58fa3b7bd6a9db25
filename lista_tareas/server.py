"""Server Entry Point — runs the API under uvicorn.

uvicorn owns SIGINT/SIGTERM: it stops accepting requests and runs the lifespan
shutdown, which closes the connection pool.
"""

import uvicorn

from lista_tareas.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "lista_tareas.main:app",
        host=settings.app_host,
        port=settings.app_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
