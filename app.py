"""
Big Two Magic Web App
Streamlit interface for playing and simulating runs.
"""

import streamlit as st
import pandas as pd

from bigtwo_magic.engine.game import GameState, GameConfig, Phase
from bigtwo_magic.engine.intents import (
    SelectToggle, Play, Pass, Redraw, ChooseMagic, BuyShopItem, LeaveShop, Restart
)
from bigtwo_magic.engine.magic import MagicOption
from bigtwo_magic.engine.shop import SHOP_ITEMS
from bigtwo_magic.simulator import Simulator

SUIT_ICONS = {"Diamonds": "♦", "Clubs": "♣", "Hearts": "♥", "Spades": "♠"}

# Page config
st.set_page_config(
    page_title="Big Two Magic",
    page_icon="🃏",
    layout="wide"
)

st.title("🃏 Big Two Magic")
st.markdown("*Play 1, 2 or 5 card combos, chain them, and clear three levels*")


def get_game() -> GameState:
    if "game" not in st.session_state:
        st.session_state.game = GameState(GameConfig())
    return st.session_state.game


def send(intent):
    get_game().apply(intent)
    st.rerun()


# Sidebar for settings
st.sidebar.header("Mode")
mode = st.sidebar.radio("Mode", ["Play", "Simulate"], label_visibility="collapsed")

if mode == "Play":
    game = get_game()
    snap = game.snapshot()

    # Top-level metrics
    col1, col2, col3, col4, col5 = st.columns(5)
    with col1:
        st.metric("Level", snap.level if snap.phase != Phase.FINISHED else "Done")
    with col2:
        st.metric("Score", f"{snap.score:.1f} / {snap.target:g}")
    with col3:
        st.metric("Gold", f"{snap.gold:.0f}")
    with col4:
        st.metric("Chain", f"{snap.chain_count} (x{snap.chain_multiplier:.2f})")
    with col5:
        st.metric("Deck / Discard", f"{snap.deck_size} / {snap.discard_size}")

    if snap.phase == Phase.FAILED:
        st.error("💀 You failed.")
    elif snap.phase == Phase.FINISHED:
        st.success("🏆 You cleared all levels!")

    # Hand
    st.subheader("Hand")
    if snap.hand:
        cols = st.columns(len(snap.hand))
        for i, card in enumerate(snap.hand):
            with cols[i]:
                label = f"{card.rank_name}{SUIT_ICONS[card.suit.value]}"
                selected = i in snap.selected
                if st.button(label, key=f"card_{i}", type="primary" if selected else "secondary",
                             use_container_width=True, disabled=snap.phase != Phase.PLAYING):
                    send(SelectToggle(i))
        if snap.selected and snap.phase == Phase.PLAYING:
            st.caption(f"Selection: {game.preview(snap.selected).hand_type.label}")
    else:
        st.markdown("*Empty*")

    if snap.phase == Phase.PLAYING:
        col1, col2, col3 = st.columns(3)
        with col1:
            if st.button("PLAY", type="primary", use_container_width=True):
                send(Play())
        with col2:
            if st.button("PASS", use_container_width=True):
                send(Pass())
        with col3:
            if snap.discard_redraw_available and st.button("REDRAW", use_container_width=True):
                send(Redraw())

    elif snap.phase == Phase.SHOPPING:
        st.subheader(f"🛒 Shop (gold {snap.gold:.0f})")
        cols = st.columns(3)
        for n, item in enumerate(SHOP_ITEMS):
            with cols[n % 3]:
                if st.button(f"{item.name}\n\n{item.description} - {item.cost} gold",
                             key=f"shop_{item.item_id}", disabled=item.cost > snap.gold,
                             use_container_width=True):
                    send(BuyShopItem(item.item_id))
        if st.button("Continue", type="primary"):
            send(LeaveShop())

    elif snap.phase == Phase.CHOOSING_MAGIC:
        st.subheader("✨ Choose Magic")
        card_index = None
        if snap.hand:
            card_index = st.selectbox(
                "Card (for Suit Change / Card Multiplier)",
                options=list(range(len(snap.hand))),
                format_func=lambda i: str(snap.hand[i]),
            )
        cols = st.columns(len(MagicOption))
        for col, option in zip(cols, MagicOption):
            with col:
                if st.button(f"{option.title}\n\n{option.description}", key=f"magic_{option.value}",
                             use_container_width=True):
                    send(ChooseMagic(option, card_index if option.needs_card else None))

    if st.sidebar.button("🔄 Restart"):
        send(Restart())

    st.divider()
    st.subheader("📜 Log")
    for msg in snap.log:
        st.code(msg)

else:
    num_runs = st.sidebar.slider("Number of Runs", min_value=10, max_value=500, value=100, step=10)
    seed = st.sidebar.number_input("Seed", min_value=0, value=0, step=1)

    if st.button("🎲 Run Simulation", type="primary", use_container_width=True):
        with st.spinner("Running simulation..."):
            result = Simulator().run_batch(runs=num_runs, seed=int(seed))

        if result.win_rate > 50:
            st.success(f"🏆 Win Rate: {result.wins}/{result.runs} ({result.win_rate:.1f}%)")
        elif result.win_rate > 0:
            st.warning(f"Win Rate: {result.wins}/{result.runs} ({result.win_rate:.1f}%)")
        else:
            st.error(f"Win Rate: {result.wins}/{result.runs} ({result.win_rate:.1f}%)")

        col1, col2, col3 = st.columns(3)
        with col1:
            st.metric("Avg Level", f"{result.avg_level:.2f}")
        with col2:
            st.metric("Avg Score", f"{result.avg_score:.1f}")
        with col3:
            st.metric("Avg Plays", f"{result.avg_plays:.1f}")

        st.subheader("Level Distribution")
        chart_data = pd.DataFrame({
            'Level': list(result.level_distribution.keys()),
            'Runs': list(result.level_distribution.values())
        }).sort_values('Level')

        st.bar_chart(chart_data.set_index('Level'))

# Footer
st.divider()
st.markdown("*Built with the Big Two Magic engine*")
