import streamlit as st

from core.config import config


def render():
    st.markdown(
        """
        <style>
          .welcome-title{
            font-size: 48px;
            line-height: 1.1;
            margin: .2em 0 .1em 0;
            letter-spacing: .5px;
          }
          @media (max-width: 768px){
            .welcome-title{ font-size: 34px; }
          }
          @media (prefers-color-scheme: dark){
            .welcome-title{ color: #f3f4f6; }
          }
        </style>
        """,
        unsafe_allow_html=True,
    )

    st.markdown('<div class="welcome-title">Password Generator 🔑</div>', unsafe_allow_html=True)

    st.markdown(
        "Build random passwords from the character sets you pick, "
        "with a strength estimate and a short history of the last "
        f"{config.history_capacity} passwords."
    )
    st.markdown(
        "History lives only in this browser session and is gone on reload."
    )

    st.info("Open **Generator** in the sidebar to start.")
