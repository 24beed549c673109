"""
Runner del sync Splash -> Webflow para cron, sin instalar el paquete.

  python scripts/splash_to_webflow_sync.py --dry-run
"""

from __future__ import annotations

import sys
from pathlib import Path

from dotenv import load_dotenv

# Permite ejecutar este script desde cualquier cwd sin configurar PYTHONPATH.
# La carpeta "api" contiene el paquete raíz `eventsync/`.
_API_ROOT = Path(__file__).resolve().parents[1]
if str(_API_ROOT) not in sys.path:
    sys.path.insert(0, str(_API_ROOT))

# Cargar variables desde .env si existe:
# - api/.env (recomendado)
# - repo_root/.env
load_dotenv(_API_ROOT / ".env", override=False)
load_dotenv(_API_ROOT.parent / ".env", override=False)

from eventsync.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
