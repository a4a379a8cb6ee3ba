# run_dev.py
"""
Local development launcher for FastAPI.
Equivalent to: `uvicorn fernbot.app:app --reload --host 0.0.0.0 --port $PORT`
"""

import uvicorn

from fernbot.settings import settings

if __name__ == "__main__":
    uvicorn.run(
        "fernbot.app:app",
        host="0.0.0.0",
        port=settings.PORT,
        reload=True,
    )
