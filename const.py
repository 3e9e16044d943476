# -----------------------------
# Configuration (tweak as needed)
# -----------------------------

SCREEN_W, SCREEN_H = 1280, 720     # PyGame window size (resizable)
FPS = 60

CAM_INDEX = 0                      # Webcam index
CAM_WIDTH, CAM_HEIGHT = 1280, 720  # Request these from the camera (best effort)

# Reference images for color sampling (F00.jpg .. F29.jpg)
IMAGE_DIR = "assets"
IMAGE_PATTERN = "F*.jpg"

BACKGROUND_COLOR = (255, 255, 255)
