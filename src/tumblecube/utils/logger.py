import os
import json
import logging
import pandas as pd
from datetime import datetime
from typing import Any, Dict, List, Optional

from PIL import Image

logger = logging.getLogger(__name__)


class ExperimentLogger:
    def __init__(self, log_dir: str, experiment_name: str):
        """
        Initializes the logger for a batch of games.

        Args:
            log_dir (str): The base directory for logs.
            experiment_name (str): A unique name for the experiment.
        """
        self.timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.experiment_name = f"{experiment_name}_{self.timestamp}"
        self.run_dir = os.path.join(log_dir, self.experiment_name)
        self.images_dir = os.path.join(self.run_dir, "images")
        self.logs: List[Dict[str, Any]] = []

        os.makedirs(self.run_dir, exist_ok=True)
        os.makedirs(self.images_dir, exist_ok=True)

    def log_game(self, game: int, data: Dict[str, Any], verbose: bool = True):
        """
        Logs the outcome of a single game.

        Args:
            game (int): The game number.
            data (Dict[str, Any]): Fields of the game result. An optional
                ``image`` entry holding a PIL image of the final board is
                written to the images directory.
            verbose (bool): Whether to print game information to console.
        """
        log_entry = {"game": game, "timestamp": datetime.now().isoformat(), **data}

        if "image" in log_entry and isinstance(log_entry["image"], Image.Image):
            image_path = os.path.join(self.images_dir, f"game_{game}.png")
            log_entry["image"].save(image_path)
            log_entry["image_path"] = image_path
            del log_entry["image"]

            if verbose:
                print(f"  📷 Saved image: game_{game}.png")

        if verbose:
            if log_entry.get("solved"):
                print(f"🏁 Game {game}: solved after {log_entry.get('scenarios_evaluated', '?')} scenario(s)")
            else:
                print(f"❌ Game {game}: not solved")

        self.logs.append(log_entry)

    def save_logs(self):
        """Saves all collected logs to a JSON file plus a text summary."""
        log_file = os.path.join(self.run_dir, "experiment_log.json")
        with open(log_file, "w", encoding="utf-8") as f:
            json.dump(self.logs, f, indent=2, default=str)

        summary_file = os.path.join(self.run_dir, "summary.txt")
        self._create_summary_file(summary_file)

        print(f"📁 Logs saved to: {log_file}")
        print(f"📋 Summary saved to: {summary_file}")
        return log_file

    def _create_summary_file(self, summary_file: str):
        """Create a human-readable summary file."""
        solved = [log for log in self.logs if log.get("solved")]

        with open(summary_file, "w", encoding="utf-8") as f:
            f.write(f"Experiment Summary: {self.experiment_name}\n")
            f.write("=" * 60 + "\n")
            f.write(f"Games Played: {len(self.logs)}\n")
            f.write(f"Games Solved: {len(solved)}\n")
            f.write(f"Images Saved: {len([log for log in self.logs if 'image_path' in log])}\n")
            f.write("\nGame-by-game breakdown:\n")
            f.write("-" * 30 + "\n")

            for log in self.logs:
                game = log.get("game", "?")
                status = "SOLVED" if log.get("solved") else "UNSOLVED"
                f.write(
                    f"Game {game}: {status} - {log.get('scenarios_evaluated', 0)} scenario(s), "
                    f"{log.get('moves_attempted', 0)} move(s) attempted\n"
                )

    def save_results_to_csv(self, results: Dict[str, Any], csv_path: str,
                            extra: Optional[Dict[str, Any]] = None) -> pd.DataFrame:
        """
        Saves the final results to a CSV file.
        If the file exists, it appends the new results.

        Args:
            results (Dict[str, Any]): A dictionary of results.
            csv_path (str): The path to the output CSV file.
            extra (Dict[str, Any]): Additional columns for this row.

        Returns:
            The full table after appending.
        """
        row = {"experiment": self.experiment_name, **results, **(extra or {})}
        results_df = pd.DataFrame([row])

        if os.path.exists(csv_path):
            try:
                existing_df = pd.read_csv(csv_path)
                updated_df = pd.concat([existing_df, results_df], ignore_index=True)
            except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
                logger.warning("Could not read existing CSV file %s: %s. Creating a new one.", csv_path, e)
                updated_df = results_df
        else:
            updated_df = results_df

        directory = os.path.dirname(csv_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        updated_df.to_csv(csv_path, index=False)
        print(f"Results saved to {csv_path}")
        return updated_df
