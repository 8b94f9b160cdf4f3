# /run.py
import os

# Load environment variables from .env file
from dotenv import load_dotenv
load_dotenv()

# Now, import the app factory
from nutrito import create_app

# Create the app instance
app = create_app()

if __name__ == '__main__':
    port = int(os.getenv('PORT', 5000))
    print(f"Starting Nutrito API on port {port}...")
    app.run(host='127.0.0.1', port=port, debug=app.debug)
