import logging

import streamlit as st

from src.config import settings
from src.ui.layout import render_dashboard


def main() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    st.set_page_config(
        page_title="PWC Miner vs Traditional Miners",
        layout="wide",
    )
    render_dashboard()


if __name__ == "__main__":
    main()
