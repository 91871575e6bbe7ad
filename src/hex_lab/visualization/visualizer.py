"""Matplotlib-based chart helpers for HexLab."""

from __future__ import annotations

import pandas as pd

from ..formatting import abbreviate_address, abbreviate_number


class Visualizer:
    """Collection of static helpers that turn analytics outputs into charts."""

    @staticmethod
    def _plt():
        try:
            import matplotlib.pyplot as plt
        except Exception as exc:  # pragma: no cover
            raise RuntimeError(
                "matplotlib is required for visualization. Install via pip."
            ) from exc
        return plt

    @staticmethod
    def _axis_formatter():
        from matplotlib.ticker import FuncFormatter

        return FuncFormatter(lambda value, _pos: abbreviate_number(value))

    @staticmethod
    def daily_flow(
        daily: pd.DataFrame,
        title: str = "Daily and cumulative ETH",
        *,
        save_path: str | None = None,
        show: bool = True,
    ) -> None:
        """Bars for the daily amount, a line for the cumulative total on a second axis."""
        if daily.empty:
            return
        plt = Visualizer._plt()
        fig, ax_left = plt.subplots(figsize=(12, 6))
        ax_right = ax_left.twinx()
        ax_left.bar(daily.index, daily["amount"], color="#3b82f6", label="Daily Total")
        ax_right.plot(
            daily.index, daily["cumulative"], color="#10b981", label="Cumulative Total"
        )
        formatter = Visualizer._axis_formatter()
        ax_left.yaxis.set_major_formatter(formatter)
        ax_right.yaxis.set_major_formatter(formatter)
        ax_left.set_ylabel("Daily Total (ETH)")
        ax_right.set_ylabel("Cumulative Total (ETH)")
        ax_left.set_title(title)
        fig.autofmt_xdate(rotation=45)
        fig.tight_layout()
        if save_path:
            fig.savefig(save_path, bbox_inches="tight")
        if show:
            plt.show()

    @staticmethod
    def bar_counterparties(
        summary: pd.DataFrame,
        title: str = "Top counterparties by ETH",
        key_col: str = "key",
        y_col: str = "amount",
        top_n: int = 15,
        *,
        save_path: str | None = None,
        show: bool = True,
    ) -> None:
        if summary.empty:
            return
        top = summary.sort_values(y_col, ascending=False).head(top_n)
        plt = Visualizer._plt()
        plt.figure(figsize=(10, 6))
        plt.bar([abbreviate_address(str(k)) for k in top[key_col]], top[y_col])
        plt.title(title)
        plt.ylabel("ETH")
        plt.xticks(rotation=45, ha="right")
        plt.tight_layout()
        if save_path:
            plt.savefig(save_path, bbox_inches="tight")
        if show:
            plt.show()


__all__ = ["Visualizer"]
