import cv2
import numpy as np
from collections import deque

from pixelseed.capture import save_frame, seed_path
from pixelseed.config import CAMERA_INDEX, DEFAULT_SEED_FILE
from pixelseed.entropy import derive_seed
from pixelseed.errors import PixelSeedError
from pixelseed.log import setup_logging
from pixelseed.operations import Rng, execute
from pixelseed.utils import to_rgba

# --- CONFIG ---
PREVIEW_SIZE = (640, 360)
GRAPH_HEIGHT = 80
MAX_CHECKSUM = 32 * 255


def draw_dashboard(frame, seed, checksum_history):
    h, w = frame.shape[:2]
    vis = frame.copy()

    # 1. Seed bytes as a 32-cell strip along the top
    cell = w // 32
    for i, b in enumerate(seed):
        cv2.rectangle(vis, (i * cell, 0), ((i + 1) * cell - 1, 12), (int(b), int(b), int(b)), -1)

    # 2. Checksum graph
    overlay = np.zeros((GRAPH_HEIGHT, w, 3), dtype=np.uint8)
    if len(checksum_history) > 1:
        points = []
        for i, val in enumerate(checksum_history):
            y_pos = GRAPH_HEIGHT - 1 - int((val / MAX_CHECKSUM) * (GRAPH_HEIGHT - 10))
            x_pos = int((i / len(checksum_history)) * w)
            points.append((x_pos, y_pos))
        cv2.polylines(overlay, [np.array(points)], False, (0, 165, 255), 2)

    return np.vstack([vis, overlay])


def run_live_demo(camera_index=CAMERA_INDEX, seed_file=DEFAULT_SEED_FILE):
    print("STARTING LIVE SEED PREVIEW...")
    setup_logging()
    cap = cv2.VideoCapture(camera_index)
    if not cap.isOpened():
        print(f"Cannot open camera {camera_index}")
        return

    checksum_history = deque(maxlen=100)
    path = seed_path(seed_file)

    while True:
        ret, frame = cap.read()
        if not ret: break

        # Seed comes from the full-resolution frame, only the preview is resized
        seed, checksum = derive_seed(to_rgba(frame))
        checksum_history.append(checksum)

        vis = draw_dashboard(cv2.resize(frame, PREVIEW_SIZE), seed, checksum_history)
        cv2.putText(vis, f"Checksum: {checksum}", (10, 40), cv2.FONT_HERSHEY_SIMPLEX, 0.6, (255, 255, 255), 2)
        cv2.putText(vis, "SPACE: Save seed | Q: Quit", (10, 70), cv2.FONT_HERSHEY_SIMPLEX, 0.6, (0, 255, 0), 2)
        cv2.imshow("Seed Preview", vis)

        key = cv2.waitKey(1) & 0xFF
        if key == ord('q'): break
        if key == ord(' '):
            try:
                # Derive from the PNG round trip, exactly like `main.py save`
                saved_seed, _ = derive_seed(save_frame(frame, path))
                print(f"\nSaved {path}")
                print(execute(saved_seed, Rng()).text)
            except PixelSeedError as e:
                print(f"error [{e.stage}]: {e}")

    cap.release()
    cv2.destroyAllWindows()


if __name__ == "__main__":
    run_live_demo()
