from .core.config import get_port
from .main import create_app

# Create Flask app
app = create_app()

if __name__ == "__main__":
    # python -m library_catalog.app (development server)
    app.run(host="0.0.0.0", port=get_port(), debug=False)
