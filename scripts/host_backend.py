# in scripts/host_backend.py
import uvicorn
import os
from pathlib import Path

# Set TEST_MODE to True BEFORE anything else is imported
os.environ['TEST_MODE'] = 'True'

PROJECT_ROOT = Path(__file__).parent.parent

if __name__ == '__main__':
    port = int(os.environ.get('PORT', 5000))
    src_path = str(PROJECT_ROOT / "src")

    uvicorn.run(
        "academy_billing.main:app",
        host="127.0.0.1",
        port=port,
        reload=True,
        reload_dirs=[src_path]
    )
