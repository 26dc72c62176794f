"""
Emoji Mirror - cover the faces in a photo with emoji matching their expression.

This Streamlit app detects faces in an uploaded (or camera) photo, reads
whether each face smiles and which eyes are open, and pastes the matching
emoji sticker over it.
"""

import io
import sys
from pathlib import Path

import streamlit as st
from PIL import Image

# Add project root to path so the app runs without installing the package
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from emojify.assets import default_emoji_assets, load_emoji_assets
from emojify.emoji import Emoji
from emojify.emojifier import Emojifier
from emojify.face_detector import FaceDetector
from emojify.image_processor import ImageProcessor


# Page configuration
st.set_page_config(
    page_title="Emoji Mirror 🎭",
    page_icon="🎭",
    layout="wide",
    initial_sidebar_state="expanded"
)

# Custom CSS for better UI
st.markdown("""
<style>
    .main-header {
        font-size: 3rem;
        font-weight: bold;
        text-align: center;
        margin-bottom: 2rem;
        color: #1f77b4;
    }
    .emoji-row {
        font-size: 3rem;
        text-align: center;
        margin: 1rem 0;
    }
</style>
""", unsafe_allow_html=True)


@st.cache_resource
def load_detector(min_face_size: int):
    """Create the face detector (cached)."""
    return FaceDetector(min_face_size=(min_face_size, min_face_size))


@st.cache_resource
def load_assets():
    """Load emoji stickers (cached); falls back to the rendered defaults."""
    asset_dir = project_root / 'assets' / 'emoji'
    if asset_dir.exists():
        assets = load_emoji_assets(asset_dir)
        if assets:
            return assets
    return default_emoji_assets()


def main():
    """Main application."""

    # Header
    st.markdown('<h1 class="main-header">🎭 Emoji Mirror</h1>', unsafe_allow_html=True)
    st.markdown("### Turn the faces in your photo into emoji")

    # Sidebar
    with st.sidebar:
        st.header("⚙️ Settings")

        source = st.radio(
            "Photo Source",
            options=['Upload', 'Camera'],
            index=0,
            help="Upload a picture or take one with your webcam"
        )

        min_face_size = st.slider(
            "Minimum Face Size (px)",
            min_value=24,
            max_value=256,
            value=48,
            step=8,
            help="Smaller faces are ignored"
        )

        show_boxes = st.checkbox(
            "Show Face Boxes",
            value=False,
            help="Draw the detected face boxes on the original photo"
        )

        show_probs = st.checkbox(
            "Show Probabilities",
            value=False,
            help="Display smiling / eye-open probabilities for each face"
        )

    detector = load_detector(min_face_size)
    if not detector.available:
        st.error("❌ Face detection not available. Please check your OpenCV installation.")
        st.stop()

    emojifier = Emojifier(detector, load_assets())
    image_processor = ImageProcessor()

    col1, col2 = st.columns([2, 1])

    with col1:
        if source == 'Upload':
            photo = st.file_uploader("📷 Choose a photo", type=['png', 'jpg', 'jpeg'])
        else:
            photo = st.camera_input("📷 Take a photo")

        if photo is None:
            st.info("👆 Upload or take a photo to begin!")
        else:
            with Image.open(photo) as pil_image:
                original = image_processor.from_pil(pil_image)

            result = emojifier.emojify(original)

            if result.no_faces:
                st.info(f"🔍 {result.notices[0]}")
            else:
                for notice in result.notices:
                    st.warning(f"⚠️ {notice}")

            display_original = original
            if show_boxes:
                display_original = detector.draw_face_boxes(
                    original, [f.face for f in result.faces]
                )

            left, right = st.columns(2)
            with left:
                st.subheader("Original")
                st.image(display_original, use_container_width=True)
            with right:
                st.subheader("Emojified")
                st.image(result.image, use_container_width=True)

            if result.faces:
                # Glyph plus label, the winks share a glyph on both sides
                badges = ' &nbsp; '.join(f.emoji.badge for f in result.faces)
                st.markdown(
                    f'<div class="emoji-row">{badges}</div>',
                    unsafe_allow_html=True,
                )

                if show_probs:
                    st.subheader("Faces")
                    st.dataframe([
                        {
                            'emoji': f.emoji.badge,
                            'smiling': round(f.face.signal.smiling_probability, 3),
                            'left eye open': round(f.face.signal.left_eye_open_probability, 3),
                            'right eye open': round(f.face.signal.right_eye_open_probability, 3),
                            'applied': f.applied,
                        }
                        for f in result.faces
                    ])

            st.download_button(
                "⬇️ Download",
                data=_to_png_bytes(image_processor, result.image),
                file_name="emojified.png",
                mime="image/png",
            )

    with col2:
        st.header("ℹ️ Information")

        st.markdown("""
        ### How it works:
        1. **Face Detection** - Finds every face in the photo
        2. **Expression** - Checks for a smile and which eyes are open
        3. **Emoji** - Picks one of eight emoji
        4. **Sticker** - Pastes it over the face, sized to the face

        ### Tips:
        - Ensure good lighting
        - Face the camera directly
        - Make clear expressions
        - Lower the minimum face size for group photos
        """)

        st.markdown("---")
        st.markdown("### 📊 Emoji Classes")
        for emoji in Emoji:
            st.markdown(f"{emoji.glyph} **{emoji.label}**")


def _to_png_bytes(image_processor: ImageProcessor, image) -> bytes:
    buffer = io.BytesIO()
    image_processor.to_pil(image).save(buffer, format='PNG')
    return buffer.getvalue()


if __name__ == "__main__":
    main()
