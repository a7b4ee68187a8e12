SQUARE = [
    ".....",
    ".S-7.",
    ".|.|.",
    ".L-J.",
    ".....",
]

TANGLED = [
    "..F7.",
    ".FJ|.",
    "SJ.L7",
    "|F--J",
    "LJ...",
]

TWO_ROOMS = [
    "...........",
    ".S-------7.",
    ".|F-----7|.",
    ".||.....||.",
    ".||.....||.",
    ".|L-7.F-J|.",
    ".|..|.|..|.",
    ".L--J.L--J.",
    "...........",
]

# the two inner rooms only meet the outside through a corner-to-corner gap
SQUEEZE = [
    "..........",
    ".S------7.",
    ".|F----7|.",
    ".||....||.",
    ".||....||.",
    ".|L-7F-J|.",
    ".|..||..|.",
    ".L--JL--J.",
    "..........",
]

SCATTERED = [
    ".F----7F7F7F7F-7....",
    ".|F--7||||||||FJ....",
    ".||.FJ||||||||L7....",
    "FJL7L7LJLJ||LJ.L-7..",
    "L--J.L7...LJS7F-7L7.",
    "....F-J..F7FJ|L7L7L7",
    "....L7.F7||L7|.L7L7|",
    ".....|FJLJ|FJ|F7|.LJ",
    "....FJL-7.||.||||...",
    "....L---J.LJ.LJLJ...",
]

# junk pipes everywhere and the loop runs along the top edge
JUNK = [
    "FF7FSF7F7F7F7F7F---7",
    "L|LJ||||||||||||F--J",
    "FL-7LJLJ||||||LJL-77",
    "F--JF--7||LJLJ7F7FJ-",
    "L---JF-JLJ.||-FJLJJ7",
    "|F|F-JF---7F7-L7L|7|",
    "|FFJF7L7F-JF7|JL---7",
    "7-L-JL7||F7|L7F-7F7|",
    "L.L7LFJ|||||FJL7||LJ",
    "L7JLJL-JLJLJL--JLJ.L",
]

# every border tile is part of the loop
BORDER = [
    "F-7",
    "|.|",
    "L-S",
]

# the '-' left of the start points at it but is not on the loop
EXTRA_NEIGHBOUR = [
    ".....",
    "-S-7.",
    ".|.|.",
    ".L-J.",
    ".....",
]

DEAD_END = [
    ".....",
    ".S-7.",
    ".|...",
    ".L-J.",
    ".....",
]
