# tests/conftest.py
# Las fixtures (context, api_client, *_steps) y los hooks viven en el plugin del paquete.
# Si está instalado ya lo carga el entry point; esta línea cubre el caso sin instalar.
pytest_plugins = ["booking_bdd.plugin"]
