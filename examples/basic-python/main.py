"""
Basic Python example for webhook-verify

This is a minimal working example showing how to:
- Receive webhook deliveries over HTTP
- Reject deliveries with invalid or stale signatures
- Handle graceful shutdown
"""

import os
import signal
from http.server import BaseHTTPRequestHandler, HTTPServer
from webhook_verify import WebhookReceiver, WebhookEvent
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


# Initialize receiver
receiver = WebhookReceiver(
    secret=os.getenv("WEBHOOK_SECRET"),
    tolerance=int(os.getenv("WEBHOOK_TOLERANCE", "300"))
)


# Handle webhook events
@receiver.on_webhook
def handle_webhook(event: WebhookEvent):
    payload = event.json()
    print(f"📬 Received webhook signed at {event.timestamp}")
    print(f"   Type: {payload.get('type')}")


@receiver.on_error
def on_error(error):
    print(f"❌ Rejected: {error}")


class WebhookHandler(BaseHTTPRequestHandler):
    def do_POST(self):
        length = int(self.headers.get("Content-Length", 0))
        body = self.rfile.read(length)

        if receiver.handle_http_webhook(body, dict(self.headers)):
            self.send_response(200)
        else:
            self.send_response(400)
        self.end_headers()


server = HTTPServer(("", int(os.getenv("PORT", "8000"))), WebhookHandler)


# Graceful shutdown
def signal_handler(sig, frame):
    print("\nShutting down...")
    server.server_close()
    exit(0)


signal.signal(signal.SIGINT, signal_handler)
signal.signal(signal.SIGTERM, signal_handler)


# Start
if __name__ == "__main__":
    print(f"🔐 Listening for webhooks on port {server.server_port}...")
    server.serve_forever()
