"""
Pipeline de sincronización one-way: Splash -> Webflow CMS.

Este paquete está diseñado para ejecutarse como job (cron / task scheduler)
o disparado desde el endpoint POST /api/v1/sync/splash-webflow.

Objetivos de diseño:
- Idempotencia: se puede ejecutar N veces sin duplicar eventos.
- Sin estado local: el Splash ID guardado en Webflow es la única fuente de verdad.
- Mapeo tolerante a cambios en el schema de la colección.
- Un evento que falla no aborta el batch.
"""
