import os
import pandas as pd


SUMMARY_COLUMNS = ['name', 'query_length', 'target_length', 'score', 'mean_ns', 'median_ns', 'speed_ratio']


def _ensure_parent_dir(path: str):
    """Create the parent directory of path if needed."""
    output_dir = os.path.dirname(path)
    if output_dir and not os.path.exists(output_dir):
        os.makedirs(output_dir, exist_ok=True)


def write_results(df: pd.DataFrame, output_path: str):
    """
    Write benchmark results to a CSV or JSON file.

    Args:
        df: DataFrame with one row per benchmark case
        output_path: Destination path; '.json' writes a list of records, anything else CSV
    """
    _ensure_parent_dir(output_path)

    if output_path.lower().endswith('.json'):
        df.to_json(output_path, orient='records', indent=2)
    else:
        df.to_csv(output_path, index=False)


def _format_number(value, fmt: str) -> str:
    if pd.isna(value):
        return '-'
    return format(value, fmt)


def write_summary(df: pd.DataFrame, summary_path: str):
    """
    Write benchmark summary report to a text file.

    Args:
        df: DataFrame produced by BenchmarkRunner.run()
        summary_path: Path to output summary text file
    """
    missing = [col for col in SUMMARY_COLUMNS if col not in df.columns]
    if missing:
        raise ValueError(f"DataFrame is missing required columns: {', '.join(missing)}")

    _ensure_parent_dir(summary_path)

    with open(summary_path, 'w', encoding='utf-8') as f:
        f.write("=" * 78 + "\n")
        f.write("JARO-WINKLER BENCHMARK SUMMARY\n")
        f.write("=" * 78 + "\n\n")

        f.write(f"Cases: {len(df)}\n")
        if 'prefix_length' in df.columns and len(df) > 0:
            f.write(f"Prefix length: {int(df['prefix_length'].iloc[0])}\n")
        if len(df) > 0:
            f.write(f"Mean time per call (all cases): {df['mean_ns'].mean():.1f} ns\n")
        f.write("\n")

        f.write("-" * 78 + "\n")
        f.write(f"{'Case':<28} {'Len':>7} {'Score':>10} {'Mean ns':>10} {'Median ns':>10} {'vs rapidfuzz':>12}\n")
        f.write("-" * 78 + "\n")
        for _, row in df.iterrows():
            lengths = f"{int(row['query_length'])}/{int(row['target_length'])}"
            f.write(
                f"{row['name']:<28} {lengths:>7} "
                f"{_format_number(row['score'], '.6f'):>10} "
                f"{_format_number(row['mean_ns'], '.1f'):>10} "
                f"{_format_number(row['median_ns'], '.1f'):>10} "
                f"{_format_number(row['speed_ratio'], '.2f'):>12}\n"
            )
        f.write("\n")
        f.write("=" * 78 + "\n")
