"""
WSGI entry point for keydash
Use this with production WSGI servers like Gunicorn or uWSGI
"""
import os

from keydash import create_app
from keydash.config import ProductionConfig

# WSGI application
application = app = create_app(ProductionConfig)

if __name__ == '__main__':
    # For development/testing only
    # In production, use: gunicorn -c gunicorn.conf.py wsgi:application
    port = int(os.environ.get('PORT', 5000))
    app.run(host='0.0.0.0', port=port, debug=False)
