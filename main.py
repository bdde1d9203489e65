"""
HandSpin - Gesture-Controlled 3D Object Viewer

Entry point for the application.
"""
import argparse
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent / "src"))


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="HandSpin - Gesture-Controlled 3D Object Viewer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: config.yaml)",
    )

    parser.add_argument(
        "--model",
        choices=["torus", "sphere", "cube", "icosahedron"],
        default=None,
        help="Model to display (overrides config)",
    )

    parser.add_argument(
        "--gesture-set",
        choices=["basic", "extended"],
        default=None,
        help="Gesture vocabulary (overrides config)",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Run headless with an OpenCV landmark overlay instead of the viewer",
    )

    return parser.parse_args()


def run_webcam_debug(config):
    """
    Run webcam in debug mode - shows camera feed with landmarks and prints
    gesture and target transform changes.
    """
    import cv2
    from webcam import GestureClassifier, TrackingSession
    from webcam.session import FramePacer
    from webcam.hand_tracker import HandTracker
    from interaction import InteractionController

    tracker = HandTracker(config)
    session = TrackingSession(tracker, GestureClassifier(config.gestures))
    controller = InteractionController(config)

    print("Starting webcam debug mode...")
    print("Press 'q' to quit, 'r' to reset")
    print("-" * 40)

    if not session.start():
        print("ERROR: Could not start hand tracking")
        return 1

    pacer = FramePacer(config.camera.fps)
    last_gesture = None
    try:
        while True:
            state = session.poll()
            target = controller.tick(state)

            frame = tracker.get_frame_with_landmarks(
                session.last_landmarks, highlight_pinch=state.is_pinching
            )

            if frame is not None:
                gesture_text = f"Gesture: {state.gesture.name}"
                if target.frozen:
                    gesture_text += " (FROZEN)"
                cv2.putText(
                    frame, gesture_text, (10, 30),
                    cv2.FONT_HERSHEY_SIMPLEX, 1, (0, 255, 0), 2
                )

                info_lines = [
                    f"Pinch dist: {state.pinch_distance:.3f}",
                    f"Curled: {state.curled_fingers}",
                    f"Rotation: ({target.rotation.x:.2f}, {target.rotation.y:.2f})",
                    f"Position: ({target.position.x:.2f}, {target.position.y:.2f})",
                    f"Scale: {target.scale:.2f}",
                ]
                for i, line in enumerate(info_lines):
                    cv2.putText(
                        frame, line, (10, 60 + i * 25),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.6, (255, 255, 255), 1
                    )

                cv2.imshow("HandSpin Debug", frame)

            # Print gesture changes to console
            if state.gesture != last_gesture:
                print(f"[{tracker.frame_count:5d}] {state.gesture.name} -> {target}")
                last_gesture = state.gesture

            key = cv2.waitKey(1) & 0xFF
            if key == ord('q'):
                break
            if key == ord('r'):
                controller.reset()

            pacer.wait()

    finally:
        session.stop()
        cv2.destroyAllWindows()

    return 0


def run_viewer(config):
    """Run the Qt viewer with the webcam worker on a background thread."""
    import signal
    from PyQt5.QtWidgets import QApplication
    from viewer.window import ViewerWindow

    app = QApplication(sys.argv)

    window = ViewerWindow(config)
    window.show()
    window.start_tracking()

    def signal_handler(signum, frame):
        """Handle Ctrl+C and kill signals gracefully."""
        print(f"\nReceived signal {signum}, shutting down...")
        app.quit()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    try:
        result = app.exec_()
    finally:
        print("\nCleaning up camera resources...")
        window.stop_tracking()
        print("Cleanup complete.")

    return result


def main():
    """Main entry point."""
    args = parse_args()

    from webcam import load_config
    try:
        config = load_config(args.config)

        # Apply CLI overrides
        if args.model:
            config.ui.model = args.model
        if args.gesture_set:
            config.gestures.gesture_set = args.gesture_set
        config.validate()
    except (TypeError, ValueError) as e:
        print(f"ERROR: Invalid configuration: {e}")
        return 2

    print("HandSpin starting...")
    print(f"  Model: {config.ui.model}")
    print(f"  Gesture set: {config.gestures.gesture_set}")
    print(f"  Debug: {args.debug}")
    print()

    if args.debug:
        return run_webcam_debug(config)
    return run_viewer(config)


if __name__ == "__main__":
    sys.exit(main())
